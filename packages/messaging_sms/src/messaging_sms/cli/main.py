"""
SMS CLI

Command-line interface for SMS dispatch engine administration.

Commands:
- init-streams: Create the hand-off stream and consumer group
- send-test: Send a test OTP message through the dispatcher
- delivery-status: Look up CDAC delivery reports for a reference id
- show-request: Show a stored request and its vendor outcome
"""

import asyncio
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from basecore.logging import setup_logging
from basecore.settings import get_settings

app = typer.Typer(
    name="sms-cli",
    help="SMS Dispatch Engine CLI",
)

console = Console()

TEST_MESSAGE = (
    "Dear Customer, OTP for booking is 1234, please do not share it with anyone - INDPOST"
)
TEST_SENDER_ID = "INPOST"
TEST_ENTITY_ID = "1001081725895192800"
TEST_TEMPLATE_ID = "1007344609998507114"


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (defaults to LOG_LEVEL)"),
):
    """Configure logging for every command."""
    setup_logging(level=log_level)


def get_db():
    """Get database session."""
    from basecore.db import get_db as _get_db
    return next(_get_db())


def get_redis():
    """Get Redis client."""
    from basecore.redis import get_redis_client
    return get_redis_client()


@app.command()
def init_streams():
    """
    Create the SMS hand-off stream and its consumer group.

    Safe to run repeatedly.
    """
    from messaging_sms.streams.groups import ensure_sms_streams

    settings = get_settings()
    configs = ensure_sms_streams(get_redis(), stream_name=settings.SMS_REQUEST_STREAM)

    for config in configs:
        rprint(f"[green]Stream ready:[/green] {config.stream_name} (group: {config.group_name})")


@app.command()
def send_test(
    mobile_number: str = typer.Argument(..., help="Recipient mobile number (10 digits)"),
    application_id: str = typer.Option("4", help="Application ID mapped to the template"),
    template_id: str = typer.Option(TEST_TEMPLATE_ID, help="DLT template ID"),
    sender_id: str = typer.Option(TEST_SENDER_ID, help="Sender ID"),
    text: str = typer.Option(TEST_MESSAGE, help="Message text"),
    stub: bool = typer.Option(False, "--stub", help="Use the stub gateways instead of real ones"),
):
    """
    Send a test message.

    The message goes through the full dispatch flow at OTP priority, so it
    is stored and reconciled like any other request when storage is enabled.
    """
    from messaging_sms.contracts.payloads import Priority, SMSRequest
    from messaging_sms.errors import DispatchError
    from messaging_sms.service.dispatcher import DispatchOptions, SMSDispatcher

    settings = get_settings()
    request = SMSRequest(
        application_id=application_id,
        facility_id="facility1",
        priority=Priority.OTP,
        message_text=text,
        sender_id=sender_id,
        mobile_numbers=mobile_number,
        entity_id=TEST_ENTITY_ID,
        template_id=template_id,
    )

    async def send():
        dispatcher = SMSDispatcher.from_settings(settings, stub=stub)
        try:
            return await dispatcher.dispatch(request, DispatchOptions.from_settings(settings))
        finally:
            await dispatcher.close()

    try:
        result = asyncio.run(send())
    except DispatchError as e:
        rprint(f"[red]Dispatch failed:[/red] {e}")
        if e.code:
            rprint(f"  Code: {e.code}")
        raise typer.Exit(1)

    outcome = result.outcome
    if outcome.is_success:
        rprint("[green]Message submitted successfully![/green]")
    else:
        rprint("[red]Gateway did not accept the message[/red]")

    rprint(f"  Communication ID: {outcome.communication_id}")
    rprint(f"  Gateway: {result.request.gateway.name}")
    rprint(f"  Response code: {outcome.response_code}")
    rprint(f"  Response text: {outcome.response_text}")
    rprint(f"  Reference ID: {outcome.reference_id or '-'}")
    if result.error:
        rprint(f"  [yellow]Note: {result.error}[/yellow]")

    if not outcome.is_success:
        raise typer.Exit(1)


@app.command()
def delivery_status(
    reference_id: str = typer.Argument(..., help="Reference ID returned by the CDAC gateway"),
):
    """
    Show handset delivery reports for a CDAC message.
    """
    from messaging_sms.contracts.payloads import Gateway
    from messaging_sms.errors import DispatchError
    from messaging_sms.providers.cdac import CDACSMSProvider
    from messaging_sms.providers.credentials import CredentialProvider
    from messaging_sms.service.delivery_status import fetch_delivery_status

    settings = get_settings()

    async def fetch():
        provider = CDACSMSProvider(
            url=settings.SMS_CDAC_URL,
            delivery_status_url=settings.SMS_CDAC_DELIVERY_STATUS_URL,
            timeout=settings.SMS_VENDOR_TIMEOUT_SECONDS,
        )
        try:
            creds = CredentialProvider.from_settings(settings).for_request(Gateway.CDAC, "")
            return await fetch_delivery_status(provider, creds, reference_id)
        finally:
            await provider.close()

    try:
        reports = asyncio.run(fetch())
    except DispatchError as e:
        rprint(f"[red]Delivery status lookup failed:[/red] {e}")
        raise typer.Exit(1)

    if not reports:
        rprint("[yellow]No delivery reports found[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Delivery status for {reference_id}")
    table.add_column("Mobile")
    table.add_column("Status")
    table.add_column("Timestamp", style="dim")

    for report in reports:
        table.add_row(report.mobile_number, report.sms_status, report.timestamp)

    console.print(table)


@app.command()
def show_request(
    communication_id: str = typer.Argument(..., help="Communication ID of the request"),
):
    """
    Show a stored request and its reconciled vendor outcome.
    """
    db = get_db()

    try:
        from messaging_sms.persistence.repo import SMSRepository

        row = SMSRepository(db).get_request_by_communication_id(communication_id)

        if not row:
            rprint(f"[red]No request found for communication_id: {communication_id}[/red]")
            raise typer.Exit(1)

        table = Table(title=f"Request {communication_id}", show_header=False)
        table.add_column("Field", style="dim")
        table.add_column("Value")

        table.add_row("Request ID", str(row.request_id))
        table.add_row("Application", row.application_id)
        table.add_row("Template", row.template_id)
        table.add_row("Gateway", row.gateway)
        table.add_row("Priority", str(row.priority))
        table.add_row("Sender", row.sender_id)
        table.add_row("Mobile", row.mobile_number)
        table.add_row("Status", row.status)
        table.add_row("Response code", row.response_code or "-")
        table.add_row("Response", row.response_message or "-")
        table.add_row("Reference ID", row.reference_id or "-")
        table.add_row("Raw response", row.complete_response or "-")
        table.add_row("Created", row.created_date.strftime("%Y-%m-%d %H:%M:%S"))
        table.add_row("Updated", row.updated_date.strftime("%Y-%m-%d %H:%M:%S"))

        console.print(table)

    finally:
        db.close()


if __name__ == "__main__":
    app()
