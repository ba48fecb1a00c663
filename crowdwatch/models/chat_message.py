# crowdwatch/models/chat_message.py
"""Append-only chat log: each question with the answer it received."""

from sqlalchemy import Column, Integer, DateTime, Text
from crowdwatch.database import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    message = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<ChatMessage {self.id} at {self.timestamp}>"
