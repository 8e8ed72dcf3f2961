"""Custom domain service with simulated DNS verification."""

import logging
import random
import re
import string
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from admindash.domain.entities import CustomDomain, DnsRecord, DomainStatus
from admindash.domain.errors import NotFoundError, ValidationError, domain_not_found
from admindash.domain.notification import NotificationService
from admindash.settings import ServiceTimings
from admindash.utils.ids import next_sequential_id

if TYPE_CHECKING:
    from admindash.scheduler import Scheduler
    from admindash.storage.entity_store import EntityStore

logger = logging.getLogger(__name__)

DOMAIN_NAME = re.compile(r"^(?=.{1,253}$)([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$")
VERIFICATION_TOKEN_LENGTH = 13
VERIFICATION_TTL = 300


def domain_task_tag(domain_id: int) -> tuple[str, int]:
    """Scheduler tag for a domain's pending verification."""
    return ("domain", domain_id)


class CustomDomainService:
    """Service for attaching custom domains and verifying their DNS records."""

    def __init__(
        self,
        store: "EntityStore",
        notifications: NotificationService,
        scheduler: "Scheduler",
        rng: Optional[random.Random] = None,
        timings: Optional[ServiceTimings] = None,
    ):
        """Initialize custom domain service.

        Args:
            store: Entity store
            notifications: Receives the verification outcome
            scheduler: Runs the delayed verification check
            rng: Random generator for tokens and verification outcome
            timings: Verification delay and success rate
        """
        self.store = store
        self.notifications = notifications
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.timings = timings or ServiceTimings()

    def list_domains(self) -> list[CustomDomain]:
        return list(self.store.custom_domains)

    def get_domain(self, domain_id: int) -> Optional[CustomDomain]:
        for custom_domain in self.store.custom_domains:
            if custom_domain.id == domain_id:
                return custom_domain
        return None

    def require_domain(self, domain_id: int) -> CustomDomain:
        custom_domain = self.get_domain(domain_id)
        if custom_domain is None:
            raise NotFoundError(domain_not_found(domain_id))
        return custom_domain

    def _verification_token(self) -> str:
        alphabet = string.digits + string.ascii_lowercase
        return "".join(self.rng.choice(alphabet) for _ in range(VERIFICATION_TOKEN_LENGTH))

    def _set_status(self, domain_id: int, status: DomainStatus) -> None:
        self.store.custom_domains = tuple(
            replace(d, status=status) if d.id == domain_id else d for d in self.store.custom_domains
        )

    def add_domain(self, domain_name: str) -> CustomDomain:
        """Register a domain in Pending state with its TXT verification record.

        Raises:
            ValidationError: If the name is not a valid hostname
        """
        name = domain_name.strip().lower()
        if not DOMAIN_NAME.match(name):
            raise ValidationError(f"Invalid domain name '{domain_name}'")

        custom_domain = CustomDomain(
            id=next_sequential_id(d.id for d in self.store.custom_domains),
            domain_name=name,
            status=DomainStatus.PENDING,
            dns_records=(
                DnsRecord(
                    type="TXT",
                    host="@",
                    value=f"sar-verification={self._verification_token()}",
                    ttl=VERIFICATION_TTL,
                ),
            ),
        )
        self.store.custom_domains = self.store.custom_domains + (custom_domain,)
        return custom_domain

    def delete_domain(self, domain_id: int) -> None:
        """Remove a domain and drop its pending verification, if any."""
        self.require_domain(domain_id)
        self.scheduler.cancel_tagged(domain_task_tag(domain_id))
        self.store.custom_domains = tuple(
            d for d in self.store.custom_domains if d.id != domain_id
        )

    def verify_domain(self, domain_id: int) -> CustomDomain:
        """Start verification: Verifying now, resolved after a delay.

        Repeated calls while a check is pending restart the check.

        Raises:
            NotFoundError: If the domain does not exist
        """
        self.require_domain(domain_id)
        self.scheduler.cancel_tagged(domain_task_tag(domain_id))
        self._set_status(domain_id, DomainStatus.VERIFYING)
        self.scheduler.call_later(
            self.timings.domain_verification_delay,
            self._complete_verification,
            domain_id,
            tag=domain_task_tag(domain_id),
        )
        return self.require_domain(domain_id)

    def _complete_verification(self, domain_id: int) -> None:
        custom_domain = self.get_domain(domain_id)
        if custom_domain is None:
            logger.debug("Domain %s vanished before verification finished", domain_id)
            return

        if self.rng.random() < self.timings.domain_verification_success_rate:
            self._set_status(domain_id, DomainStatus.VERIFIED)
            self.notifications.add_notification(
                "Domain Verified", f'Successfully verified "{custom_domain.domain_name}".'
            )
            logger.info("Verified domain %s", custom_domain.domain_name)
        else:
            self._set_status(domain_id, DomainStatus.PENDING)
            self.notifications.add_notification(
                "Verification Failed",
                f'Could not verify DNS records for "{custom_domain.domain_name}".',
            )
            logger.info("Verification failed for domain %s", custom_domain.domain_name)
