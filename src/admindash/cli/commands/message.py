"""Messaging commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.entities import MessagePlatform, MessageSender
from admindash.domain.errors import DomainError

MESSAGE_PLATFORMS = [p.value for p in MessagePlatform]


def _print_thread(workspace, conversation_id: int, last: int | None = None) -> None:
    messages = workspace.messaging.messages_for(conversation_id)
    if last is not None:
        messages = messages[-last:]
    for message in messages:
        who = "You" if message.sender == MessageSender.ME else "Them"
        click.echo(f"[{message.timestamp:%H:%M:%S}] {who}: {message.text}")


@click.group()
def message_group():
    """Chat with administrators."""
    pass


@message_group.command("list")
@click.pass_context
def list_conversations(ctx):
    """List conversations, most recent first."""
    service = ctx.obj["workspace"].messaging

    conversations = sorted(service.list_conversations(), key=lambda c: c.timestamp, reverse=True)
    if not conversations:
        click.echo("No conversations yet.")
        return

    for conversation in conversations:
        unread = f" ({conversation.unread_count} unread)" if conversation.unread_count else ""
        click.echo(
            f"ID: {conversation.id:3d} | {conversation.contact_name:20s} | "
            f"{conversation.platform.value:9s} | {conversation.last_message[:40]}{unread}"
        )


@message_group.command("show")
@click.argument("conversation_id", type=int)
@click.pass_context
def show_conversation(ctx, conversation_id: int):
    """Print the messages of a conversation."""
    workspace = ctx.obj["workspace"]
    try:
        conversation = workspace.messaging.require_conversation(conversation_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Conversation with {conversation.contact_name} ({conversation.platform.value})")
    _print_thread(workspace, conversation_id)


@message_group.command("send")
@click.argument("conversation_id", type=int)
@click.argument("text")
@click.option("--platform", type=click.Choice(MESSAGE_PLATFORMS), help="Platform to send on")
@click.pass_context
def send_message(ctx, conversation_id: int, text: str, platform: str | None):
    """Send a message and wait for the reply."""
    workspace = ctx.obj["workspace"]
    try:
        workspace.messaging.send_message(
            text, conversation_id, MessagePlatform(platform) if platform else None
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    workspace.scheduler.run_until_idle()
    _print_thread(workspace, conversation_id, last=2)


@message_group.command("start")
@click.argument("contact_id", type=int)
@click.argument("text")
@click.option("--platform", type=click.Choice(MESSAGE_PLATFORMS), help="Platform to chat on")
@click.pass_context
def start_conversation(ctx, contact_id: int, text: str, platform: str | None):
    """Message an administrator, reusing an open conversation if there is one."""
    workspace = ctx.obj["workspace"]
    if platform is not None:
        workspace.messaging.change_platform(MessagePlatform(platform))

    try:
        conversation_id = workspace.messaging.start_conversation(contact_id, text)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if conversation_id is None:
        click.echo(f"Error: Administrator {contact_id} not found", err=True)
        ctx.exit(1)

    conversation = workspace.messaging.require_conversation(conversation_id)

    workspace.scheduler.run_until_idle()
    click.echo(f"Conversation {conversation.id} with {conversation.contact_name}")
    _print_thread(workspace, conversation.id, last=2)


def register_commands(cli):
    """Register messaging commands with main CLI."""
    cli.add_command(message_group, name="message")
