#!/usr/bin/env python3
"""
CLI workflow runner for manual ingestion and voice-style search.

Provides command-line interface for ingesting PDFs, inspecting inferred
structure, searching, and resolving printed page numbers.
"""
import argparse
import base64
import asyncio
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from core.exceptions import DocumentNotFoundError, IngestionError, PageOutOfRangeError
from data.database import init_database, session_scope
from data.repositories import DocumentRepository, PageRepository, SectionRepository, TOCEntryRepository
from services.ingestion_service import IngestionService
from services.search_service import SearchService


async def ingest_document_cli(file_path: str, title: str = None, category: str = None):
    """Ingest a PDF and report its inferred structure."""
    print("=" * 60)
    print(f"Ingesting: {file_path}")
    print("=" * 60)

    if not os.path.exists(file_path):
        print(f"❌ Error: File not found: {file_path}")
        return None

    with session_scope() as session:
        service = IngestionService(session)
        try:
            report = await service.ingest_file(file_path, title=title, category=category)
        except IngestionError as e:
            print(f"❌ Ingestion failed during {e.stage}: {e.message}")
            return None

    print(f"✓ Document created: {report.document_id}")
    print(f"  Title: {report.title}")
    print(f"  Pages: {report.total_pages}")
    print(f"  Content starts at physical page {report.content_start_page} ({report.content_start_method})")
    print(f"  Page offset: {report.page_offset}")
    print(f"  TOC ends at page: {report.toc_end_page or '-'}")
    print(f"  TOC entries: {report.toc_entry_count}")
    print(f"  Sections: {report.section_count}")
    print("  Page categories:")
    for category_name, count in sorted(report.category_counts.items()):
        print(f"    {category_name:<10} {count}")
    print("=" * 60)

    return report.document_id


def list_documents_cli():
    """List all documents in database."""
    with session_scope() as session:
        documents = DocumentRepository(session).list_all(limit=50)

        if not documents:
            print("No documents found in database.")
            return

        print(f"\nFound {len(documents)} documents:")
        print("-" * 90)
        print(f"{'ID':<38} {'Title':<28} {'Category':<12} {'Pages':<6} {'Start'}")
        print("-" * 90)

        for doc in documents:
            print(f"{doc.id:<38} {doc.title[:27]:<28} {(doc.category or '-'):<12} "
                  f"{doc.total_pages:<6} {doc.content_start_page}")


def show_toc_cli(document_id: str):
    """Show pages, TOC and sections for a document."""
    with session_scope() as session:
        document = DocumentRepository(session).get_by_id(document_id)
        if not document:
            print(f"❌ Document not found: {document_id}")
            return

        print(f"\nDocument: {document.title}")
        print(f"Content starts at physical page {document.content_start_page} (offset {document.page_offset})")
        print("-" * 60)

        for page in PageRepository(session).get_by_document(document_id):
            printed = page.printed_number_value or ''
            print(f"  {page.page_number:>4}  {page.category:<9} {page.confidence:>3}%  {printed}")

        entries = TOCEntryRepository(session).get_by_document(document_id)
        if entries:
            print("\nTable of Contents:")
            print("-" * 60)
            for entry in entries:
                section = f"{entry.section} " if entry.section else ""
                print(f"  {section}{entry.title} .... {entry.page}")

        sections = SectionRepository(session).get_by_document(document_id)
        if sections:
            print("\nSections:")
            print("-" * 60)
            for section in sections:
                indent = "  " * section.section_number.count('.')
                print(f"  {indent}├─ {section.section_number} {section.title} "
                      f"(pages {section.start_page}-{section.end_page})")


def search_cli(query: str, document_ids: str = None, category: str = None):
    """Search stored manuals and print voice-style results."""
    ids = [doc_id.strip() for doc_id in document_ids.split(',')] if document_ids else None

    with session_scope() as session:
        service = SearchService(session)
        context = service.load_context(document_ids=ids, category=category)
        result = service.search(query, context)

        print(f"\nQuery: {query}")
        if result.stage:
            print(f"Stage: {result.stage}")
        print("-" * 60)
        print(service.format_for_voice(result, context))


def show_page_cli(document_id: str, page_number: int, output_path: str = None):
    """Resolve a printed page number and optionally save the rendered page."""
    with session_scope() as session:
        service = SearchService(session)
        try:
            view = service.show_page(document_id, page_number, render=output_path is not None)
        except (DocumentNotFoundError, PageOutOfRangeError) as e:
            print(f"❌ {e}")
            return

        print(f"\nPrinted page {view.printed_page} = physical page {view.physical_index} of {view.document_title}")
        print("-" * 60)
        print(view.text[:1500])

        if output_path:
            if not view.image_base64:
                print("⚠️  No source PDF stored for this document, nothing rendered")
                return
            with open(output_path, 'wb') as f:
                f.write(base64.b64decode(view.image_base64))
            print(f"\n✓ Page image saved to: {output_path} ({view.image_width}x{view.image_height})")


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with one subcommand per workflow step."""
    parser = argparse.ArgumentParser(
        description='Manual structure inference and search CLI'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Init command
    init_parser = subparsers.add_parser('init-db', help='Create database tables')
    init_parser.add_argument('--database-url', type=str, default=None, help='Database URL')

    # Ingest command
    ingest_parser = subparsers.add_parser('ingest', help='Ingest a PDF manual')
    ingest_parser.add_argument('file', type=str, help='PDF file to ingest')
    ingest_parser.add_argument('--title', type=str, help='Display title')
    ingest_parser.add_argument('--category', type=str, help='Document category, e.g. electrical')

    # List command
    subparsers.add_parser('list', help='List all documents')

    # TOC command
    toc_parser = subparsers.add_parser('toc', help='Show TOC entries, sections and page categories')
    toc_parser.add_argument('document_id', type=str, help='Document ID')

    # Search command
    search_parser = subparsers.add_parser('search', help='Search stored manuals')
    search_parser.add_argument('query', type=str, help='Search query')
    search_parser.add_argument('--docs', type=str, help='Comma-separated document IDs')
    search_parser.add_argument('--category', type=str, help='Document category (or "all")')

    # Show page command
    page_parser = subparsers.add_parser('show-page', help='Show a page by its printed number')
    page_parser.add_argument('document_id', type=str, help='Document ID')
    page_parser.add_argument('page_number', type=int, help='Printed page number')
    page_parser.add_argument('-o', '--output', type=str, help='Save rendered page PNG here')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if args.command == 'init-db':
        init_database(args.database_url)
        print("✓ Database initialized")
        return

    if args.command is not None:
        init_database()

    if args.command == 'ingest':
        asyncio.run(ingest_document_cli(args.file, title=args.title, category=args.category))
    elif args.command == 'list':
        list_documents_cli()
    elif args.command == 'toc':
        show_toc_cli(args.document_id)
    elif args.command == 'search':
        search_cli(args.query, document_ids=args.docs, category=args.category)
    elif args.command == 'show-page':
        show_page_cli(args.document_id, args.page_number, args.output)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
