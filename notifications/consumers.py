import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from .services import NotificationService, notification_group_name

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncWebsocketConsumer):
    """WebSocket consumer for real-time notifications"""

    async def connect(self):
        self.user = self.scope["user"]

        if self.user.is_anonymous:
            await self.close(code=4001)
            return

        # Join user's personal notification group
        self.notification_group_name = notification_group_name(self.user.id)

        await self.channel_layer.group_add(
            self.notification_group_name,
            self.channel_name
        )

        await self.accept()

        # Snapshot so the client starts from the right totals
        await self.send_json({'type': 'unread_counts', **await self.get_counts()})

    async def disconnect(self, close_code):
        if hasattr(self, 'notification_group_name'):
            await self.channel_layer.group_discard(
                self.notification_group_name,
                self.channel_name
            )

    async def receive(self, text_data):
        """Handle incoming WebSocket messages"""
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_json({'type': 'error', 'message': 'Invalid JSON'})
            return

        message_type = data.get('type') if isinstance(data, dict) else None

        if message_type == 'mark_read':
            notification_id = data.get('notification_id')
            if notification_id:
                await self.mark_notification_read(notification_id)
        elif message_type == 'mark_all_read':
            await self.mark_all_read()
        else:
            await self.send_json({'type': 'error', 'message': 'Unknown message type'})

    # Handlers for events sent to the group
    async def notification(self, event):
        await self.send_json({
            'type': 'notification',
            'notification': event['notification'],
            'unread_notifications': event.get('unread_notifications'),
        })

    async def unread_counts(self, event):
        await self.send_json(event)

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content))

    # Database operations
    @database_sync_to_async
    def get_counts(self):
        return NotificationService().counts(self.user)

    @database_sync_to_async
    def mark_notification_read(self, notification_id):
        return NotificationService().mark_read(self.user, notification_id)

    @database_sync_to_async
    def mark_all_read(self):
        updated = NotificationService().mark_all_read(self.user)
        logger.debug(f"User {self.user.id} cleared {updated} notifications over websocket")
        return updated
