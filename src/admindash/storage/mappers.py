"""Mapper functions to convert between domain entities and JSON documents.

This layer isolates the persisted document layout (camelCase keys, one
document list per collection) from the domain entities, so either can
change without touching the other.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Optional, Sequence

from admindash.domain import entities as domain
from admindash.domain.admin import PERMISSIONS

logger = logging.getLogger(__name__)

Document = dict[str, Any]


def _money(value: Any) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid money value: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid money value: {value!r}")
    return amount


def _gigabytes(value: Any) -> float:
    return float(value)


def _known_permissions(names: Iterable[str]) -> frozenset[str]:
    """Keep only permission names the services accept; unknown ones are dropped."""
    requested = frozenset(names)
    unknown = requested - set(PERMISSIONS)
    if unknown:
        logger.warning("Dropping unknown permission(s) from stored data: %s", ", ".join(sorted(unknown)))
    return requested - unknown


def storage_usage_to_document(usage: domain.StorageUsage) -> Document:
    return {"used": usage.used, "total": usage.total}


def storage_usage_from_document(doc: Document) -> domain.StorageUsage:
    return domain.StorageUsage(used=_gigabytes(doc["used"]), total=_gigabytes(doc["total"]))


def activity_log_to_document(log: domain.ActivityLog) -> Document:
    return {
        "id": log.id,
        "timestamp": log.timestamp,
        "action": log.action,
        "details": log.details,
        "ipAddress": log.ip_address,
    }


def activity_log_from_document(doc: Document) -> domain.ActivityLog:
    return domain.ActivityLog(
        id=doc["id"],
        timestamp=doc["timestamp"],
        action=doc["action"],
        details=doc["details"],
        ip_address=doc["ipAddress"],
    )


def administrator_to_document(admin: domain.Administrator) -> Document:
    return {
        "id": admin.id,
        "name": admin.name,
        "email": admin.email,
        "role": admin.role.value,
        "status": admin.status.value,
        "avatarUrl": admin.avatar_url,
        "lastLogin": admin.last_login,
        "twoFactorEnabled": admin.two_factor_enabled,
        "permissions": sorted(admin.permissions),
        "activityLogs": [activity_log_to_document(log) for log in admin.activity_logs],
        "storageUsage": storage_usage_to_document(admin.storage_usage),
    }


def administrator_from_document(doc: Document) -> domain.Administrator:
    return domain.Administrator(
        id=doc["id"],
        name=doc["name"],
        email=doc["email"],
        role=domain.AdministratorRole(doc["role"]),
        status=domain.AdministratorStatus(doc["status"]),
        avatar_url=doc["avatarUrl"],
        last_login=doc["lastLogin"],
        two_factor_enabled=doc["twoFactorEnabled"],
        permissions=_known_permissions(doc["permissions"]),
        activity_logs=tuple(activity_log_from_document(log) for log in doc["activityLogs"]),
        storage_usage=storage_usage_from_document(doc["storageUsage"]),
    )


def app_to_document(app: domain.ManagedApp) -> Document:
    return {
        "id": app.id,
        "name": app.name,
        "platform": app.platform.value,
        "repository": app.repository,
        "status": app.status.value,
        "lastDeployed": app.last_deployed,
        "resources": {
            "cpu": list(app.resources.cpu),
            "memory": list(app.resources.memory),
            "storage": storage_usage_to_document(app.resources.storage),
        },
        "environmentVariables": dict(app.environment_variables),
        "deployments": [
            {"id": d.id, "version": d.version, "timestamp": d.timestamp, "status": d.status.value}
            for d in app.deployments
        ],
        "logs": [
            {"id": log.id, "timestamp": log.timestamp, "level": log.level.value, "message": log.message}
            for log in app.logs
        ],
    }


def app_from_document(doc: Document) -> domain.ManagedApp:
    resources = doc["resources"]
    return domain.ManagedApp(
        id=doc["id"],
        name=doc["name"],
        platform=domain.AppPlatform(doc["platform"]),
        repository=doc["repository"],
        status=domain.AppStatus(doc["status"]),
        last_deployed=doc["lastDeployed"],
        resources=domain.AppResources(
            cpu=tuple(int(v) for v in resources["cpu"]),
            memory=tuple(int(v) for v in resources["memory"]),
            storage=storage_usage_from_document(resources["storage"]),
        ),
        environment_variables=dict(doc["environmentVariables"]),
        deployments=tuple(
            domain.Deployment(
                id=d["id"],
                version=d["version"],
                timestamp=d["timestamp"],
                status=domain.DeploymentStatus(d["status"]),
            )
            for d in doc["deployments"]
        ),
        logs=tuple(
            domain.LogEntry(
                id=log["id"],
                timestamp=log["timestamp"],
                level=domain.LogLevel(log["level"]),
                message=log["message"],
            )
            for log in doc["logs"]
        ),
    )


def transaction_to_document(txn: domain.Transaction) -> Document:
    return {
        "id": txn.id,
        "description": txn.description,
        "amount": txn.amount,
        "type": txn.type.value,
        "category": txn.category,
        "accountId": txn.account_id,
        "date": txn.date,
    }


def transaction_from_document(doc: Document) -> domain.Transaction:
    return domain.Transaction(
        id=doc["id"],
        description=doc["description"],
        amount=_money(doc["amount"]),
        type=domain.TransactionType(doc["type"]),
        category=doc["category"],
        account_id=doc["accountId"],
        date=doc["date"],
    )


def account_to_document(account: domain.Account) -> Document:
    return {
        "id": account.id,
        "name": account.name,
        "type": account.type.value,
        "balance": account.balance,
        "currency": account.currency,
        "cardNumber": account.card_number,
        "cvv": account.cvv,
        "accountNumber": account.account_number,
        "routingNumber": account.routing_number,
    }


def account_from_document(doc: Document) -> domain.Account:
    return domain.Account(
        id=doc["id"],
        name=doc["name"],
        type=domain.AccountType(doc["type"]),
        balance=_money(doc["balance"]),
        currency=doc.get("currency", "USD"),
        card_number=doc.get("cardNumber"),
        cvv=doc.get("cvv"),
        account_number=doc.get("accountNumber"),
        routing_number=doc.get("routingNumber"),
    )


def budget_to_document(budget: domain.Budget) -> Document:
    return {"id": budget.id, "category": budget.category, "limit": budget.limit}


def budget_from_document(doc: Document) -> domain.Budget:
    # Documents written by older versions may still carry "spent"; it is
    # derived from transactions now and ignored here.
    return domain.Budget(id=doc["id"], category=doc["category"], limit=_money(doc["limit"]))


def task_to_document(task: domain.Task) -> Document:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "dueDate": task.due_date,
        "priority": task.priority.value,
        "completed": task.completed,
    }


def task_from_document(doc: Document) -> domain.Task:
    return domain.Task(
        id=doc["id"],
        title=doc["title"],
        description=doc["description"],
        due_date=doc["dueDate"],
        priority=domain.TaskPriority(doc["priority"]),
        completed=doc["completed"],
    )


def notification_to_document(notification: domain.Notification) -> Document:
    return {
        "id": notification.id,
        "title": notification.title,
        "description": notification.description,
        "timestamp": notification.timestamp,
        "read": notification.read,
        "icon": notification.icon,
        "iconColor": notification.icon_color,
    }


def notification_from_document(doc: Document) -> domain.Notification:
    return domain.Notification(
        id=doc["id"],
        title=doc["title"],
        description=doc["description"],
        timestamp=doc["timestamp"],
        read=doc["read"],
        icon=doc.get("icon"),
        icon_color=doc.get("iconColor"),
    )


def conversation_to_document(conversation: domain.Conversation) -> Document:
    return {
        "id": conversation.id,
        "contactId": conversation.contact_id,
        "contactName": conversation.contact_name,
        "avatarUrl": conversation.avatar_url,
        "lastMessage": conversation.last_message,
        "timestamp": conversation.timestamp,
        "unreadCount": conversation.unread_count,
        "platform": conversation.platform.value,
        "status": conversation.status.value,
        "email": conversation.email,
        "phone": conversation.phone,
    }


def conversation_from_document(doc: Document) -> domain.Conversation:
    return domain.Conversation(
        id=doc["id"],
        contact_id=doc.get("contactId"),
        contact_name=doc["contactName"],
        avatar_url=doc["avatarUrl"],
        last_message=doc["lastMessage"],
        timestamp=doc["timestamp"],
        unread_count=doc["unreadCount"],
        platform=domain.MessagePlatform(doc["platform"]),
        status=domain.ContactStatus(doc["status"]),
        email=doc["email"],
        phone=doc["phone"],
    )


def message_to_document(message: domain.Message) -> Document:
    return {
        "id": message.id,
        "conversationId": message.conversation_id,
        "text": message.text,
        "timestamp": message.timestamp,
        "sender": message.sender.value,
        "platform": message.platform.value,
    }


def message_from_document(doc: Document) -> domain.Message:
    return domain.Message(
        id=doc["id"],
        conversation_id=doc["conversationId"],
        text=doc["text"],
        timestamp=doc["timestamp"],
        sender=domain.MessageSender(doc["sender"]),
        platform=domain.MessagePlatform(doc["platform"]),
    )


def api_key_to_document(api_key: domain.ApiKey) -> Document:
    return {
        "id": api_key.id,
        "name": api_key.name,
        "key": api_key.key,
        "status": api_key.status.value,
        "scopes": sorted(api_key.scopes),
        "createdAt": api_key.created_at,
        "lastUsed": api_key.last_used,
    }


def api_key_from_document(doc: Document) -> domain.ApiKey:
    return domain.ApiKey(
        id=doc["id"],
        name=doc["name"],
        key=doc["key"],
        status=domain.ApiKeyStatus(doc["status"]),
        scopes=_known_permissions(doc["scopes"]),
        created_at=doc["createdAt"],
        last_used=doc.get("lastUsed"),
    )


def custom_domain_to_document(custom_domain: domain.CustomDomain) -> Document:
    return {
        "id": custom_domain.id,
        "domainName": custom_domain.domain_name,
        "status": custom_domain.status.value,
        "dnsRecords": [
            {"type": r.type, "host": r.host, "value": r.value, "ttl": r.ttl}
            for r in custom_domain.dns_records
        ],
    }


def custom_domain_from_document(doc: Document) -> domain.CustomDomain:
    return domain.CustomDomain(
        id=doc["id"],
        domain_name=doc["domainName"],
        status=domain.DomainStatus(doc["status"]),
        dns_records=tuple(
            domain.DnsRecord(type=r["type"], host=r["host"], value=r["value"], ttl=r["ttl"])
            for r in doc["dnsRecords"]
        ),
    )


def recurring_transaction_to_document(recurring: domain.RecurringTransaction) -> Document:
    return {
        "id": recurring.id,
        "description": recurring.description,
        "amount": recurring.amount,
        "type": recurring.type.value,
        "category": recurring.category,
        "frequency": recurring.frequency.value,
        "nextDueDate": recurring.next_due_date,
    }


def recurring_transaction_from_document(doc: Document) -> domain.RecurringTransaction:
    return domain.RecurringTransaction(
        id=doc["id"],
        description=doc["description"],
        amount=_money(doc["amount"]),
        type=domain.TransactionType(doc["type"]),
        category=doc["category"],
        frequency=domain.RecurrenceFrequency(doc["frequency"]),
        next_due_date=doc["nextDueDate"],
    )


def collection_encoder(to_document: Callable[[Any], Document]) -> Callable[[Sequence[Any]], list]:
    """Build an encoder for a tuple of entities."""
    return lambda items: [to_document(item) for item in items]


def collection_decoder(from_document: Callable[[Document], Any]) -> Callable[[list], tuple]:
    """Build a decoder producing a tuple of entities."""

    def decode(documents: list) -> tuple:
        if not isinstance(documents, list):
            raise TypeError(f"Expected a list of documents, got {type(documents).__name__}")
        return tuple(from_document(doc) for doc in documents)

    return decode


def optional_encoder(to_document: Callable[[Any], Document]) -> Callable[[Optional[Any]], Optional[Document]]:
    """Build an encoder for a single, possibly missing, entity."""
    return lambda item: None if item is None else to_document(item)


def optional_decoder(from_document: Callable[[Document], Any]) -> Callable[[Optional[Document]], Optional[Any]]:
    """Build a decoder for a single, possibly missing, entity."""
    return lambda doc: None if doc is None else from_document(doc)
