# crowdwatch/models/media.py
"""
Uploaded video records.
The file itself lives in UPLOAD_DIR under an opaque generated filename;
heatmap_data is filled in once by the media analyzer.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, BigInteger
from crowdwatch.database import Base


class MediaRecord(Base):
    __tablename__ = "media_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(100), unique=True, nullable=False)
    original_name = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False)
    mime_type = Column(String(100), nullable=False)
    uploaded_at = Column(DateTime, nullable=False)
    processed_at = Column(DateTime)
    is_processed = Column(Boolean, default=False, nullable=False)
    heatmap_data = Column(JSON)

    def __repr__(self):
        return f"<MediaRecord {self.id} {self.original_name} processed={self.is_processed}>"
