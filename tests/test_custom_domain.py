"""Tests for custom domains and simulated DNS verification."""

import pytest

from admindash.domain.custom_domain import CustomDomainService
from admindash.domain.entities import DomainStatus
from admindash.domain.errors import NotFoundError, ValidationError
from admindash.domain.notification import NotificationService
from admindash.settings import ServiceTimings


def make_service(store, scheduler, clock, rng, success_rate=0.7):
    notifications = NotificationService(store, clock=clock, rng=rng)
    timings = ServiceTimings(domain_verification_success_rate=success_rate)
    return CustomDomainService(store, notifications, scheduler, rng=rng, timings=timings)


@pytest.fixture
def domains(store, scheduler, clock, rng):
    return make_service(store, scheduler, clock, rng)


def test_add_domain_is_pending_with_txt_record(domains):
    custom_domain = domains.add_domain("  Shop.Example.COM ")

    assert custom_domain.id == 2
    assert custom_domain.domain_name == "shop.example.com"
    assert custom_domain.status == DomainStatus.PENDING
    (record,) = custom_domain.dns_records
    assert record.type == "TXT"
    assert record.host == "@"
    assert record.ttl == 300
    assert record.value.startswith("sar-verification=")
    assert len(record.value) == len("sar-verification=") + 13


@pytest.mark.parametrize("name", ["", "localhost", "bad_domain.com", "-lead.example.com"])
def test_invalid_domain_rejected(domains, name):
    with pytest.raises(ValidationError):
        domains.add_domain(name)


def test_verification_success(store, scheduler, clock, rng):
    domains = make_service(store, scheduler, clock, rng, success_rate=1.0)
    custom_domain = domains.add_domain("shop.example.com")

    assert domains.verify_domain(custom_domain.id).status == DomainStatus.VERIFYING
    scheduler.advance(2.4)
    assert domains.require_domain(custom_domain.id).status == DomainStatus.VERIFYING

    scheduler.advance(0.2)

    assert domains.require_domain(custom_domain.id).status == DomainStatus.VERIFIED
    notification = store.notifications[0]
    assert notification.title == "Domain Verified"
    assert notification.description == 'Successfully verified "shop.example.com".'


def test_verification_failure_returns_to_pending(store, scheduler, clock, rng):
    domains = make_service(store, scheduler, clock, rng, success_rate=0.0)
    custom_domain = domains.add_domain("shop.example.com")

    domains.verify_domain(custom_domain.id)
    scheduler.run_until_idle()

    assert domains.require_domain(custom_domain.id).status == DomainStatus.PENDING
    notification = store.notifications[0]
    assert notification.title == "Verification Failed"
    assert notification.description == 'Could not verify DNS records for "shop.example.com".'


def test_reverify_restarts_check(store, scheduler, clock, rng):
    domains = make_service(store, scheduler, clock, rng, success_rate=1.0)
    before = len(store.notifications)

    domains.verify_domain(1)
    scheduler.advance(2.0)
    domains.verify_domain(1)
    scheduler.advance(2.0)

    assert domains.require_domain(1).status == DomainStatus.VERIFYING
    scheduler.run_until_idle()
    assert len(store.notifications) == before + 1


def test_delete_cancels_pending_verification(domains, store, scheduler):
    before = len(store.notifications)
    domains.verify_domain(1)

    domains.delete_domain(1)
    scheduler.run_until_idle()

    assert domains.list_domains() == []
    assert len(store.notifications) == before


def test_unknown_domain(domains):
    with pytest.raises(NotFoundError):
        domains.verify_domain(7)
