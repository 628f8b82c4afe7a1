"""CLI application using Typer."""

try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError as e:
    raise ImportError(
        "CLI requires typer and rich. Install with: pip install task-tracker-mcp[cli]"
    ) from e

import json
import sys
from datetime import datetime
from typing import Any, Optional

from task_tracker_mcp.config import get_configured_user
from task_tracker_mcp.domain.entities.enums import TaskPriority, TaskStatus
from task_tracker_mcp.domain.entities.request_context import RequestContext
from task_tracker_mcp.domain.entities.result_types import DomainResult
from task_tracker_mcp.services import (
    CompleteTaskCommand,
    CreateTaskCommand,
    DeleteTaskCommand,
    GetTaskByIdQuery,
    GetTasksQuery,
    TaskHandlers,
    UpdateTaskCommand,
    get_service_factory,
)

console = Console()
app = typer.Typer(
    name="tracker",
    help="Task Tracker - personal task management",
    no_args_is_help=True,
)


def _handlers() -> TaskHandlers:
    return get_service_factory().get_task_handlers()


def _context() -> RequestContext:
    """Build the request context from the configured identity."""
    user = get_configured_user()
    if user is None:
        console.print("[red]Error:[/red] No user identity configured; set TASK_TRACKER_USER_ID")
        raise typer.Exit(1)
    return RequestContext(user=user)


def _fail(result: DomainResult[Any], format: str = "text") -> None:
    if format == "json":
        json.dump({"success": False, "error": result.reason}, sys.stdout, default=str)
        sys.stdout.write("\n")
    else:
        console.print(f"[red]Error:[/red] {result.reason}")
    raise typer.Exit(1)


# Task commands
task_app = typer.Typer(help="Task management commands")
app.add_typer(task_app, name="task")


@task_app.command("create")
def task_create(
    title: str = typer.Argument(..., help="Task title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    due_date: Optional[datetime] = typer.Option(None, "--due", help="Due date (UTC)"),
    priority: TaskPriority = typer.Option(TaskPriority.MEDIUM, "--priority", "-p", help="Priority"),
) -> None:
    """Create a new task."""
    command = CreateTaskCommand(
        title=title, description=description, due_date=due_date, priority=priority
    )
    result = _handlers().create.handle(command, _context())

    if result.is_failure:
        _fail(result)
    console.print(f"[green]Task created:[/green] {result.value.id}")
    console.print(f"Title: {result.value.title}")


@task_app.command("list")
def task_list(
    page: int = typer.Option(1, "--page", help="Page number"),
    page_size: int = typer.Option(20, "--page-size", help="Tasks per page"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="Filter by status"),
    priority: Optional[TaskPriority] = typer.Option(
        None, "--priority", "-p", help="Filter by priority"
    ),
    format: str = typer.Option("text", "--format", "-f", help="Output format (text/json)"),
) -> None:
    """List your tasks, newest first."""
    query = GetTasksQuery(page=page, page_size=page_size, status=status, priority=priority)
    result = _handlers().get_list.handle(query, _context())

    if result.is_failure:
        _fail(result, format)

    tasks = result.value
    if format == "json":
        json.dump(
            {"success": True, "data": tasks.to_dict(lambda t: t.to_dict())},
            sys.stdout,
            default=str,
        )
        sys.stdout.write("\n")
        return

    if not tasks.items:
        console.print("No tasks found.")
        return

    table = Table(title=f"Tasks (page {tasks.page}/{tasks.total_pages}, {tasks.total_count} total)")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Due")

    for t in tasks.items:
        table.add_row(
            t.id[:8] + "...",
            t.title,
            t.status.value,
            t.priority.value,
            t.due_date.strftime("%Y-%m-%d") if t.due_date else "",
        )

    console.print(table)


@task_app.command("show")
def task_show(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Show task details."""
    result = _handlers().get_by_id.handle(GetTaskByIdQuery(task_id=task_id), _context())

    if result.is_failure:
        _fail(result)

    task = result.value
    console.print(f"\n[bold]{task.title}[/bold]")
    console.print(f"ID: {task.id}")
    console.print(f"Status: {task.status.value}")
    console.print(f"Priority: {task.priority.value}")
    if task.due_date:
        console.print(f"Due: {task.due_date.isoformat()}")
    if task.description:
        console.print(f"Description: {task.description}")
    console.print(f"Created: {task.created_at.isoformat()}")


@task_app.command("update")
def task_update(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    due_date: Optional[datetime] = typer.Option(None, "--due", help="Due date (UTC)"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="New status"),
    priority: Optional[TaskPriority] = typer.Option(None, "--priority", "-p", help="New priority"),
) -> None:
    """Update a task."""
    command = UpdateTaskCommand(
        task_id=task_id,
        title=title,
        description=description,
        due_date=due_date,
        clear_due_date=clear_due,
        priority=priority,
        status=status,
    )
    if command == UpdateTaskCommand(task_id=task_id):
        console.print("[yellow]No updates specified[/yellow]")
        return

    result = _handlers().update.handle(command, _context())

    if result.is_failure:
        _fail(result)
    console.print(f"[green]Task updated:[/green] {result.value.title}")


@task_app.command("complete")
def task_complete(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Mark a task as completed."""
    result = _handlers().complete.handle(CompleteTaskCommand(task_id=task_id), _context())

    if result.is_failure:
        _fail(result)
    console.print(f"[green]Task completed:[/green] {result.value.title}")


@task_app.command("delete")
def task_delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes:
        typer.confirm(f"Delete task {task_id}?", abort=True)

    result = _handlers().delete.handle(DeleteTaskCommand(task_id=task_id), _context())

    if result.is_failure:
        _fail(result)
    console.print(f"[green]{result.value['message']}[/green]")


# Database commands
db_app = typer.Typer(help="Database commands")
app.add_typer(db_app, name="db")


@db_app.command("health")
def db_health() -> None:
    """Check the database connection."""
    health = get_service_factory().orm_manager.perform_health_check()

    if health.get("healthy"):
        console.print(f"[green]Healthy[/green] ({health['database_path']})")
        console.print(f"Tables: {', '.join(health['tables'])}")
        console.print(f"Live tasks: {health['live_task_count']}")
    else:
        console.print(f"[red]Unhealthy:[/red] {health.get('error')}")
        raise typer.Exit(1)


def create_app() -> typer.Typer:
    """Create and return the Typer app."""
    return app
