from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.rates.infrastructure.transport import TelegramApiError, get_transport


class Command(BaseCommand):
    help = 'Register the webhook URL Telegram delivers updates to'

    def add_arguments(self, parser):
        parser.add_argument(
            'url',
            nargs='?',
            help='Public HTTPS URL of /api/v1/bot/webhook/'
        )
        parser.add_argument(
            '--delete',
            action='store_true',
            help='Remove the webhook instead of setting it'
        )

    def handle(self, **options):
        url = options['url']
        delete = options['delete']

        if not delete and not url:
            raise CommandError('A webhook URL is required unless --delete is given')

        try:
            transport = get_transport()
            if delete:
                transport.delete_webhook()
            else:
                transport.set_webhook(url, secret_token=settings.TELEGRAM_WEBHOOK_SECRET)
        except (ValueError, TelegramApiError) as e:
            raise CommandError(str(e))

        if delete:
            self.stdout.write(self.style.SUCCESS('Webhook removed'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Webhook set to {url}'))
