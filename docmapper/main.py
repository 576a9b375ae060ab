"""Command-line entry point for the template field mapper."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

from docmapper.api.client import TemplateApiError, TemplateDocumentClient
from docmapper.config import ENTITY_TYPES, EditorConfig, clamp_zoom
from docmapper.pdf.writer import PdfWriteError, write_mapping_preview
from docmapper.state.loader import load_mapped_fields

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmapper",
        description="Map CRM fields onto a template document's pages.",
    )
    parser.add_argument("document_id", help="Template document id")
    parser.add_argument("--base-url", help="CRM backend base URL")
    parser.add_argument("--token", help="Bearer token for the CRM backend")
    parser.add_argument("--entity-type", choices=ENTITY_TYPES, help="Source field entity type")
    parser.add_argument("--zoom", type=float, help="Initial render zoom (0.5 - 2.0)")
    parser.add_argument(
        "--export-preview",
        type=Path,
        metavar="PATH",
        help="Write a preview PDF of the saved mappings instead of opening the editor",
    )
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number the preview boxes are drawn on (default: 1)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> EditorConfig:
    config = EditorConfig.from_env()
    if args.base_url:
        config.api_base_url = args.base_url
    if args.token:
        config.api_token = args.token
    if args.entity_type:
        config.entity_type = args.entity_type
    if args.zoom is not None:
        config.zoom = clamp_zoom(args.zoom)
    return config


def export_preview(
    client: TemplateDocumentClient,
    document_id: str,
    output_path: Path,
    page_index: int = 0,
) -> int:
    try:
        content = client.fetch_document_file(document_id)
    except TemplateApiError as exc:
        logger.error("Could not fetch template document %s: %s", document_id, exc)
        return 1

    fields = load_mapped_fields(client, document_id)
    try:
        write_mapping_preview(content, output_path, fields, page_index=page_index)
    except PdfWriteError:
        logger.error("Preview export failed for %s", document_id, exc_info=True)
        return 1
    return 0


def run_editor(client: TemplateDocumentClient, config: EditorConfig, document_id: str) -> int:
    from PySide6.QtWidgets import QApplication

    from docmapper.ui.main_window import EditorWindow

    app = QApplication(sys.argv[:1])
    window = EditorWindow(client=client, config=config, document_id=document_id)
    window.show()
    window.load()
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = TemplateDocumentClient(config)
    if args.export_preview is not None:
        return export_preview(client, args.document_id, args.export_preview, args.page - 1)
    return run_editor(client, config, args.document_id)


if __name__ == "__main__":
    sys.exit(main())
