import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.core.exceptions import ValidationError

from .models import Conversation, Message
from .services import MessagingService, chat_group_name

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncWebsocketConsumer):
    """WebSocket consumer for real-time messaging"""

    async def connect(self):
        # Get conversation ID from URL route
        self.conversation_id = self.scope['url_route']['kwargs']['conversation_id']

        # Get user from scope
        self.user = self.scope["user"]

        if self.user.is_anonymous:
            await self.close(code=4001)
            return

        # Check if user is participant in this conversation
        self.conversation = await self.get_conversation()
        if self.conversation is None:
            await self.close(code=4003)
            return

        # Join room group
        self.room_group_name = chat_group_name(self.conversation.id)
        await self.channel_layer.group_add(
            self.room_group_name,
            self.channel_name
        )

        await self.accept()

        await self.channel_layer.group_send(
            self.room_group_name,
            {
                'type': 'user_status',
                'user_id': self.user.id,
                'user_name': self.user.display_name,
                'status': 'online'
            }
        )

    async def disconnect(self, close_code):
        if hasattr(self, 'room_group_name'):
            await self.channel_layer.group_send(
                self.room_group_name,
                {
                    'type': 'user_status',
                    'user_id': self.user.id,
                    'user_name': self.user.display_name,
                    'status': 'offline'
                }
            )

            # Leave room group
            await self.channel_layer.group_discard(
                self.room_group_name,
                self.channel_name
            )

    async def receive(self, text_data):
        """Receive message from WebSocket"""
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON")
            return

        if not isinstance(data, dict):
            await self.send_error("Invalid JSON")
            return

        message_type = data.get('type', 'message')

        if message_type == 'message':
            await self.handle_message(data)
        elif message_type == 'typing':
            await self.handle_typing(data)
        elif message_type == 'read_receipt':
            await self.handle_read_receipt(data)
        else:
            await self.send_error("Unknown message type")

    async def handle_message(self, data):
        """Store and broadcast a chat message"""
        content = data.get('content')
        if not isinstance(content, str) or not content.strip():
            await self.send_error("Message content cannot be empty")
            return

        # The service broadcasts to this group and notifies the other side
        message = await self.create_message(content)
        if message is None:
            await self.send_error("Message could not be sent")

    async def handle_typing(self, data):
        """Handle typing indicators"""
        await self.channel_layer.group_send(
            self.room_group_name,
            {
                'type': 'typing_indicator',
                'user_id': self.user.id,
                'user_name': self.user.display_name,
                'is_typing': bool(data.get('is_typing', False)),
            }
        )

    async def handle_read_receipt(self, data):
        """Mark the conversation read and tell the other side"""
        message_id = data.get('message_id')

        if await self.mark_conversation_read(message_id):
            await self.channel_layer.group_send(
                self.room_group_name,
                {
                    'type': 'read_receipt',
                    'message_id': message_id,
                    'user_id': self.user.id,
                    'user_name': self.user.display_name
                }
            )

    # Handlers for messages sent to the group
    async def chat_message(self, event):
        """Send chat message to WebSocket"""
        await self.send(text_data=json.dumps({
            'type': 'message',
            'message': event['message']
        }))

    async def user_status(self, event):
        """Send user status update to WebSocket"""
        # Don't send to the user who triggered the status change
        if event.get('user_id') != self.user.id:
            await self.send(text_data=json.dumps({
                'type': 'user_status',
                'user_id': event['user_id'],
                'user_name': event['user_name'],
                'status': event['status']
            }))

    async def typing_indicator(self, event):
        """Send typing indicator to WebSocket"""
        # Don't send to the user who is typing
        if event.get('user_id') == self.user.id:
            return

        await self.send(text_data=json.dumps({
            'type': 'typing',
            'user_id': event['user_id'],
            'user_name': event['user_name'],
            'is_typing': event['is_typing']
        }))

    async def read_receipt(self, event):
        """Send read receipt to WebSocket"""
        if event.get('user_id') == self.user.id:
            return

        await self.send(text_data=json.dumps({
            'type': 'read_receipt',
            'message_id': event['message_id'],
            'user_id': event['user_id'],
            'user_name': event['user_name']
        }))

    async def send_error(self, message):
        """Send error message to WebSocket"""
        await self.send(text_data=json.dumps({
            'type': 'error',
            'message': message
        }))

    # Database operations
    @database_sync_to_async
    def get_conversation(self):
        """The conversation, if the user is an active participant"""
        try:
            conversation = Conversation.objects.get(id=self.conversation_id, is_active=True)
        except (Conversation.DoesNotExist, ValueError, ValidationError):
            return None

        if not conversation.has_participant(self.user):
            logger.info(f"User {self.user.id} refused from conversation {self.conversation_id}")
            return None
        return conversation

    @database_sync_to_async
    def create_message(self, content):
        return MessagingService().send_message(self.conversation, self.user, content)

    @database_sync_to_async
    def mark_conversation_read(self, message_id=None):
        if message_id:
            try:
                if not Message.objects.filter(id=message_id, conversation=self.conversation).exists():
                    return False
            except (ValueError, ValidationError):
                return False

        MessagingService().mark_conversation_read(self.conversation, self.user)
        return True
