from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from ingest_core.config import settings
from ingest_core.connection import IndexConnection
from ingest_core.errors import IngestError
from ingest_core.etl.artifacts import LocalArtifactStore
from ingest_core.etl.pipeline import build_manifest
from ingest_core.factory import BUILDERS, build_authenticator, build_document_builder
from ingest_core.logging import setup_logging
from ingest_core.payload import FilePayload
from ingest_cli.config_loader import IngestConfig, load_config


def config_from_settings(args: argparse.Namespace) -> IngestConfig:
    cfg = settings.model_copy()
    if args.builder:
        cfg.builder = args.builder
    if args.unique_id_field is not None:
        cfg.unique_id_field = args.unique_id_field
    if args.timestamp_field:
        cfg.timestamp_field = args.timestamp_field
    return IngestConfig(
        builder=build_document_builder(cfg),
        authenticator=build_authenticator(cfg),
        index_url=cfg.index_url,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert delimited files into index documents.")
    parser.add_argument("inputs", nargs="+", type=Path, help="Payload files to convert")
    parser.add_argument("--config", type=Path, default=None, help="YAML config describing builder and auth")
    parser.add_argument("--builder", choices=BUILDERS, default=None, help="Document builder (overrides APP_BUILDER)")
    parser.add_argument("--unique-id-field", type=int, default=None, help="Zero-based column holding the document id")
    parser.add_argument("--timestamp-field", default=None, help="Add current ms since epoch under this field name")
    parser.add_argument("--output-dir", type=Path, default=None, help="Where to write document manifests")
    parser.add_argument("--ping", action="store_true", help="Check the index store is reachable before building")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    log = logging.getLogger(__name__)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config:
        overrides = [
            flag
            for flag, value in (
                ("--builder", args.builder),
                ("--unique-id-field", args.unique_id_field),
                ("--timestamp-field", args.timestamp_field),
            )
            if value is not None
        ]
        if overrides:
            parser.error(f"{', '.join(overrides)} cannot be combined with --config; set them in the YAML file")
        cfg = load_config(args.config)
    else:
        cfg = config_from_settings(args)
    if args.ping:
        if not cfg.index_url:
            parser.error("--ping requires index_url in the config or APP_INDEX_URL")
        conn = IndexConnection(url=cfg.index_url, authenticator=cfg.authenticator, timeout=settings.index_timeout_sec)
        if not conn.ping():
            log.error("Index store unreachable: %s", cfg.index_url)
            return 2

    store = LocalArtifactStore(root=args.output_dir or Path(settings.staging_dir))
    status = 0
    total = 0
    for path in args.inputs:
        payload = FilePayload(path=path)
        try:
            manifest = build_manifest(cfg.builder.build(payload))
        except IngestError as e:
            log.error("Failed to build documents from %s: %s", path, e)
            status = 1
            continue
        key = store.put_manifest(manifest, name=path.stem)
        total += manifest["count"]
        log.info("Built %d documents from %s (manifest=%s)", manifest["count"], path, key)

    print(f"Built {total} documents from {len(args.inputs)} file(s).")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
