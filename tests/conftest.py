"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import AnalyzedPage, PrintedPageNumber
from data.db_models import Base


MAIN_TOPICS = [
    "General Requirements",
    "Wiring Methods",
    "Grounding and Bonding",
    "Overcurrent Protection",
    "Panelboards",
    "Conductor Sizing",
    "Motor Circuits",
    "Solar Inverters",
]


def main_page_text(section: int, printed: int, extra: str = "") -> str:
    """Technical body page with a numbered heading and a printed number."""
    return (
        f"{section}.1 {MAIN_TOPICS[section - 1]}\n"
        "All conductors shall be sized for the circuit load and the voltage rating "
        "of the cable must match the panel rating. Grounding of the equipment enclosure "
        "is required before installation of any breaker or fuse.\n"
        f"{extra}\n"
        f"{printed}"
    )


@pytest.fixture(scope="session")
def test_db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test, emptying tables afterwards."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for test files."""
    return tmp_path


@pytest.fixture
def scenario_a_pages():
    """
    12-page manual: two title pages, two Roman-numbered preface pages,
    then main content printed 1..8 on physical pages 5..12.
    """
    pages = [
        "ACME ELECTRICAL INSTALLATION MANUAL\nSecond Edition\nPublished by Acme Press",
        "Copyright (c) 2021 Acme Press. All rights reserved.\nPrinted in USA",
        "Preface\nThis book explains how to plan work safely and where to find "
        "the rules that apply to each job. Read it before starting.\niii",
        "Foreword\nThe authors thank the many readers who sent corrections "
        "to earlier printings of this book.\niv",
    ]
    for physical in range(5, 13):
        section = physical - 4
        extra = "Use 240V for the dryer circuit." if physical == 10 else ""
        pages.append(main_page_text(section, section, extra))
    return pages


@pytest.fixture
def page_factory():
    """Build AnalyzedPage objects tersely: page_factory(3, 'main', printed=('arabic', 1))."""
    def make(index, category='unknown', printed=None, text=None, chars=None):
        number = None
        if printed is not None:
            kind, magnitude = printed
            number = PrintedPageNumber(kind=kind, value=str(magnitude), magnitude=magnitude)
        if text is None:
            text = 'x' * (chars if chars is not None else 100)
        return AnalyzedPage(
            physical_index=index,
            text=text,
            category=category,
            confidence=50,
            printed_number=number
        )
    return make


@pytest.fixture
def sample_pdf_path(temp_dir, scenario_a_pages):
    """Write the scenario pages into a real PDF."""
    import fitz

    pdf_path = temp_dir / "manual.pdf"
    doc = fitz.open()
    for text in scenario_a_pages:
        page = doc.new_page()
        page.insert_textbox(fitz.Rect(50, 50, 550, 800), text, fontsize=10)
    doc.save(str(pdf_path))
    doc.close()
    return str(pdf_path)
