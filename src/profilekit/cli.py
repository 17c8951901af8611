from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from .config import load_config
from .endpoints import ImageEndpoint
from .github import GitHubClient
from .readme import collect_all
from .renderers import render_with
from .storage import ConfigStorage
from .widgets.base import Services

logger = logging.getLogger(__name__)

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="profilekit", description="Build a GitHub profile README from widgets")
    ap.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    ap.add_argument("--renderer", choices=["markdown", "pillow"], help="Override renderer.kind from config")
    ap.add_argument("--out", default=None, help="Override output.path from config")
    ap.add_argument("--offline", action="store_true", help="Only synthesize markdown, do not call image endpoints")
    ap.add_argument("--no-storage", action="store_true", help="Do not read or save widget options")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    renderer = args.renderer or cfg.renderer_kind
    out_path = Path(args.out) if args.out else cfg.output_path

    services = Services(
        endpoint=ImageEndpoint(cfg.base_url),
        github=GitHubClient(cfg.github_token),
    )
    storage = None
    if not args.no_storage:
        storage = ConfigStorage(cfg.storage_path, enabled=cfg.storage_enabled)

    data = asyncio.run(collect_all(cfg, services, storage=storage, offline=args.offline))
    for res in data.results:
        if res.error is not None:
            logger.warning("%s: %s (%s)", res.name, res.error.message, res.error.kind.value)

    rendered = render_with(renderer, out_path, data, cfg.preview_path, cfg.raw.get("theme"))
    logger.info("wrote %s", rendered)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
