"""Turn a failed payment into an operator email."""

from __future__ import annotations

from paywatch.content import AlertContentGenerator
from paywatch.logbuffer import LogBuffer
from paywatch.mailer import Mailer, MailMessage
from paywatch.models import DispatchResult, FailedPayment


class AlertDispatcher:
    def __init__(
        self,
        generator: AlertContentGenerator,
        mailer: Mailer,
        logs: LogBuffer,
        sender: str,
        recipient: str,
    ) -> None:
        self.generator = generator
        self.mailer = mailer
        self.logs = logs
        self.sender = sender
        self.recipient = recipient
        self.dispatch_count = 0

    async def dispatch(self, payment: FailedPayment) -> DispatchResult:
        """Generate content, then send it. Transport failures come back as success=False."""
        self.dispatch_count += 1
        content, enriched = await self.generator.generate_with_source(payment)
        message = MailMessage(
            sender=self.sender,
            recipient=self.recipient,
            subject=content.subject,
            text=content.body,
            html=content.html_body,
        )
        try:
            message_id = await self.mailer.send(message)
        except Exception as e:
            self.logs.error("Failed to send email alert", str(e))
            return DispatchResult(success=False, error=str(e), content=content, enriched=enriched)

        self.logs.info("Email alert sent successfully", {"messageId": message_id})
        return DispatchResult(success=True, message_id=message_id, content=content, enriched=enriched)

    async def send_alert(self, payment: FailedPayment) -> bool:
        return (await self.dispatch(payment)).success
