"""CLI entry point — paywatch command."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(name="paywatch", help="Stripe failed-payment email alerts")
console = Console()


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, "--port", help="Defaults to PORT or config/default.toml"),
    host: Optional[str] = typer.Option(None, "--host"),
    reload: bool = typer.Option(False, "--reload"),
):
    """Start the webhook server."""
    import uvicorn
    from paywatch.config import load_config

    # api.main builds its own config from the environment on import
    if port is not None:
        os.environ["PORT"] = str(port)
    config = load_config()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "api.main:app",
        host=host or config.server.host,
        port=config.server.port,
        reload=reload,
    )


@app.command()
def preview(
    amount: int = typer.Option(2999, "--amount", help="Amount in minor units"),
    currency: str = typer.Option("usd", "--currency"),
    email: Optional[str] = typer.Option("test@example.com", "--email"),
    name: Optional[str] = typer.Option("Test Customer", "--name"),
    code: Optional[str] = typer.Option("card_declined", "--code"),
    message: Optional[str] = typer.Option("Your card was declined.", "--message"),
    method: Optional[str] = typer.Option("card", "--method"),
):
    """Render the offline fallback alert without calling any service."""
    from paywatch.content import fallback_content
    from paywatch.models import Customer, FailedPayment

    customer = Customer(name=name or None, email=email or None) if (name or email) else None
    payment = FailedPayment(
        amount=amount,
        currency=currency or None,
        failure_code=code or None,
        failure_message=message or None,
        customer=customer,
        payment_method_type=method or None,
    )
    content = fallback_content(payment)
    console.print(Panel(escape(content.body), title=escape(content.subject), expand=False))


@app.command("send-test")
def send_test():
    """Send the synthetic test alert through the configured model and SMTP account."""
    asyncio.run(_send_test())


async def _send_test():
    from paywatch.config import load_config
    from paywatch.context import build_context
    from paywatch.models import manual_test_payment

    ctx = build_context(load_config())
    ctx.logs.info("Manual test triggered")
    result = await ctx.dispatcher.dispatch(manual_test_payment())

    table = Table(title="Test Alert")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Delivered", "yes" if result.success else "[red]no[/red]")
    table.add_row("Recipient", ctx.dispatcher.recipient)
    table.add_row("Content", "language model" if result.enriched else "fallback template")
    if result.content:
        table.add_row("Subject", escape(result.content.subject))
    table.add_row("Message-ID", result.message_id or "-")
    if result.error:
        table.add_row("Error", f"[red]{escape(result.error)}[/red]")
    console.print(table)
    if not result.success:
        raise typer.Exit(code=1)


@app.command("config")
def show_config():
    """Print the effective configuration with secrets masked."""
    from paywatch.config import load_config
    console.print_json(data=load_config().masked())


if __name__ == "__main__":
    app()
