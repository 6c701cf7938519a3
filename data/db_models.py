"""
Database models for manual storage with inferred structure.

Stores documents, classified pages, table-of-contents entries and sections.
All rows are written once during ingestion and read at query time.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def generate_uuid():
    """Generate UUID string for primary keys."""
    return str(uuid.uuid4())


class Document(Base):
    """Top-level manual metadata."""

    __tablename__ = 'documents'

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False)
    filename = Column(String, nullable=False)
    file_path = Column(String)  # Source PDF, used for page rendering
    category = Column(String)   # e.g. 'electrical', 'plumbing'
    total_pages = Column(Integer, nullable=False)

    # Physical index where main content begins (1-based)
    content_start_page = Column(Integer, nullable=False, default=1)
    # Physical index of the last TOC page, 0 when there is none
    toc_end_page = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    pages = relationship(
        "Page", back_populates="document",
        cascade="all, delete-orphan", order_by="Page.page_number"
    )
    toc_entries = relationship("TOCEntry", back_populates="document", cascade="all, delete-orphan")
    sections = relationship("Section", back_populates="document", cascade="all, delete-orphan")

    @property
    def page_offset(self) -> int:
        """Offset added to a physical index to get the printed page number."""
        return -(self.content_start_page - 1)

    def __repr__(self):
        return f"<Document(id={self.id}, title={self.title}, pages={self.total_pages})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'title': self.title,
            'filename': self.filename,
            'category': self.category,
            'total_pages': self.total_pages,
            'content_start_page': self.content_start_page,
            'toc_end_page': self.toc_end_page,
            'page_offset': self.page_offset,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


class Page(Base):
    """A physical page with its text and inferred category."""

    __tablename__ = 'pages'
    __table_args__ = (
        UniqueConstraint('document_id', 'page_number', name='uq_page_document_number'),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    document_id = Column(String, ForeignKey('documents.id'), nullable=False)

    # Physical index (1-based position in the extracted page sequence)
    page_number = Column(Integer, nullable=False)
    text_content = Column(Text, nullable=False, default="")
    char_count = Column(Integer, nullable=False, default=0)

    # Classification output
    category = Column(String, nullable=False, default='unknown')
    confidence = Column(Integer, nullable=False, default=0)

    # Printed page number detected on the page (all null when none)
    printed_number_kind = Column(String)  # 'roman' or 'arabic'
    printed_number_value = Column(String)
    printed_number_magnitude = Column(Integer)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    document = relationship("Document", back_populates="pages")

    def __repr__(self):
        return f"<Page(id={self.id}, doc_id={self.document_id}, page_num={self.page_number}, category={self.category})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        printed = None
        if self.printed_number_kind:
            printed = {
                'kind': self.printed_number_kind,
                'value': self.printed_number_value,
                'magnitude': self.printed_number_magnitude
            }
        return {
            'id': self.id,
            'document_id': self.document_id,
            'page_number': self.page_number,
            'category': self.category,
            'confidence': self.confidence,
            'printed_number': printed,
            'char_count': self.char_count
        }


class TOCEntry(Base):
    """Table-of-contents entry parsed from TOC pages."""

    __tablename__ = 'toc_entries'

    id = Column(String, primary_key=True, default=generate_uuid)
    document_id = Column(String, ForeignKey('documents.id'), nullable=False)

    section = Column(String)  # '1.1', 'Chapter 3', 'Section A' or None
    title = Column(String, nullable=False)
    page = Column(Integer, nullable=False)  # Printed page number
    physical_index = Column(Integer)

    # Relationships
    document = relationship("Document", back_populates="toc_entries")

    def __repr__(self):
        return f"<TOCEntry(section={self.section}, title={self.title}, page={self.page})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'section': self.section,
            'title': self.title,
            'page': self.page,
            'physical_index': self.physical_index
        }


class Section(Base):
    """Numbered section heading found on content pages."""

    __tablename__ = 'sections'

    id = Column(String, primary_key=True, default=generate_uuid)
    document_id = Column(String, ForeignKey('documents.id'), nullable=False)

    section_number = Column(String, nullable=False)
    title = Column(String, nullable=False)
    parent_section_number = Column(String)

    # Physical page range
    start_page = Column(Integer, nullable=False)
    end_page = Column(Integer, nullable=False)

    # Relationships
    document = relationship("Document", back_populates="sections")

    def __repr__(self):
        return f"<Section(number={self.section_number}, title={self.title})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'id': self.id,
            'section_number': self.section_number,
            'title': self.title,
            'parent_section_number': self.parent_section_number,
            'page_range': {
                'start': self.start_page,
                'end': self.end_page
            }
        }
