import logging
import signal
import time

from django.core.management.base import BaseCommand, CommandError

from apps.rates.api.v1.serializers import UpdateSerializer
from apps.rates.application.tasks import dispatch_message
from apps.rates.infrastructure.transport import TelegramApiError, get_transport

logger = logging.getLogger(__name__)

# Pause after a failed getUpdates before polling again
ERROR_DELAY_SECONDS = 5


class Command(BaseCommand):
    help = 'Run the bot with long polling instead of a webhook'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Answer messages in this process instead of using Celery task queue'
        )
        parser.add_argument(
            '--timeout',
            type=int,
            default=30,
            help='Long polling timeout in seconds'
        )

    def handle(self, **options):
        self.sync_mode = options['sync']
        self.stopping = False

        try:
            transport = get_transport()
            # Telegram refuses getUpdates while a webhook is set
            transport.delete_webhook()
        except (ValueError, TelegramApiError) as e:
            raise CommandError(str(e))

        previous_handler = signal.signal(signal.SIGTERM, self._stop)

        self.stdout.write(self.style.SUCCESS('Bot is running. Press Ctrl+C to stop.'))
        if self.sync_mode:
            self.stdout.write('Running in synchronous mode...')

        offset = None
        try:
            while not self.stopping:
                try:
                    updates = transport.get_updates(offset=offset, timeout=options['timeout'])
                except TelegramApiError as e:
                    logger.error("%s", e)
                    time.sleep(ERROR_DELAY_SECONDS)
                    continue

                for update in updates:
                    if self.stopping:
                        break
                    offset = update["update_id"] + 1
                    self.handle_update(update)
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGTERM, previous_handler)
            if offset is not None:
                self.acknowledge(transport, offset)

        self.stdout.write(self.style.SUCCESS('Bot stopped'))

    def acknowledge(self, transport, offset: int) -> None:
        """Confirm handled updates, Telegram resends anything below the last offset it was given."""
        try:
            transport.get_updates(offset=offset, timeout=0)
        except TelegramApiError as e:
            logger.error("Could not confirm updates before %s: %s", offset, e)

    def handle_update(self, update: dict) -> None:
        """Process one update; failures are logged so the next update still gets served."""
        serializer = UpdateSerializer(data=update)
        if not serializer.is_valid():
            logger.info("Malformed update %s: %s", update.get("update_id"), serializer.errors)
            return

        message = serializer.to_incoming_message()
        if message is None:
            logger.info("Update %s has an unprocessed type, ignored", update["update_id"])
            return

        try:
            dispatch_message(message, inline=self.sync_mode)
        except Exception:
            logger.exception("Error during processing update %s", update["update_id"])

    def _stop(self, signum, frame):
        self.stopping = True
