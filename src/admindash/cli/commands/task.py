"""Task commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.entities import TaskPriority
from admindash.domain.errors import DomainError
from admindash.utils.date_parser import parse_datetime

TASK_PRIORITIES = [p.value for p in TaskPriority]


@click.group()
def task_group():
    """Manage tasks."""
    pass


@task_group.command("list")
@click.option("--open", "open_only", is_flag=True, help="Hide completed tasks")
@click.pass_context
def list_tasks(ctx, open_only: bool):
    """List tasks."""
    service = ctx.obj["workspace"].tasks

    tasks = service.list_tasks(include_completed=not open_only)
    if not tasks:
        click.echo("No tasks found.")
        return

    for task in tasks:
        box = "[x]" if task.completed else "[ ]"
        click.echo(f"{box} {task.id:3d}  {task.due_date:%Y-%m-%d}  {task.priority.value:6s}  {task.title}")


@task_group.command("add")
@click.argument("title")
@click.option("--due", required=True, help="Due date (YYYY-MM-DD or relative like 'tomorrow', 'in 3 days')")
@click.option("--description", default="", help="Task description")
@click.option("--priority", type=click.Choice(TASK_PRIORITIES), default=TaskPriority.MEDIUM.value, show_default=True)
@click.pass_context
def add_task(ctx, title: str, due: str, description: str, priority: str):
    """Add a task.

    Examples:
        admindash task add "Rotate API keys" --due "in 3 days" --priority High
    """
    service = ctx.obj["workspace"].tasks
    try:
        due_date = parse_datetime(due)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        task = service.add_task(title, due_date, description=description, priority=TaskPriority(priority))
        click.echo(f"Created task '{task.title}' (ID: {task.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@task_group.command("toggle")
@click.argument("task_id", type=int)
@click.pass_context
def toggle_task(ctx, task_id: int):
    """Mark a task done, or not done again."""
    service = ctx.obj["workspace"].tasks
    try:
        task = service.toggle_task(task_id)
        state = "completed" if task.completed else "reopened"
        click.echo(f"Task '{task.title}' {state}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register task commands with main CLI."""
    cli.add_command(task_group, name="task")
