# CrowdWatch — Database Models
# Import all models here for SQLAlchemy discovery

from crowdwatch.models.gate import Gate                   # noqa
from crowdwatch.models.alert import Alert                 # noqa
from crowdwatch.models.chat_message import ChatMessage    # noqa
from crowdwatch.models.media import MediaRecord           # noqa
