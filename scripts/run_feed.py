#!/usr/bin/env python3
"""
Build the AI feed once, outside the web server, and write the rendered HTML.

Uses the same config and wiring as the API (config/feed_config.yml + .env).
In authorization_code mode the token store needs a refresh token: either
REDIS_URL points at the store the server uses, or pass --refresh-token.
"""
import sys
import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from src.api.dependencies import build_feed_service, build_token_manager
from src.integrations.contracts.errors import FeedError
from src.integrations.contracts.tokens import TokenState
from src.utils.config_loader import load_feed_config


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def report_rotated_refresh_token(refresh_token: Optional[str], path: Optional[Path] = None) -> None:
    """Hand a rotated refresh token back to the operator; the seeded one is now spent."""
    logger = logging.getLogger(__name__)
    if not refresh_token:
        return
    logger.warning("The seeded refresh token was consumed and replaced by Cafe24")
    if path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(refresh_token + "\n", encoding="utf-8")
        logger.warning(f"New refresh token written to {path}")
    else:
        print(f"New refresh token: {refresh_token}")


async def build(config, refresh_token: Optional[str]):
    """
    Build the feed page and return it with the refresh token the run ends with.

    Cafe24 refresh tokens are single-use, so when the seeded token was rotated
    the caller has to hand the new one back to the operator.
    """
    token_manager = build_token_manager(config)
    if refresh_token:
        token_manager.store.set(TokenState(refresh_token=refresh_token))
    service = build_feed_service(config, token_manager)
    page = await service.build_feed()
    return page, token_manager.store.get().refresh_token


def main():
    """Main entry point for the feed builder"""
    parser = argparse.ArgumentParser(
        description='Render the Cafe24 product catalogue as a JSON-LD feed page',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Local sample catalogue, no credentials needed
  INTEGRATIONS_MODE=mock python scripts/run_feed.py

  # Client credentials deployment
  CAFE24_GRANT_MODE=client_credentials python scripts/run_feed.py --output out/ai-feed.html

  # Authorization-code deployment with a known refresh token
  python scripts/run_feed.py --refresh-token <token>
        """
    )
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to feed config YAML file (default: config/feed_config.yml)')
    parser.add_argument('--output', '-o', type=Path, default=Path('out/ai-feed.html'),
                        help='Where to write the rendered HTML (default: out/ai-feed.html)')
    parser.add_argument('--refresh-token', type=str, default=None,
                        help='Seed the token store with this refresh token')
    parser.add_argument('--refresh-token-file', type=Path, default=None,
                        help='Write the rotated refresh token here instead of printing it')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--log-file', type=Path, default=None, help='Also log to this file')

    args = parser.parse_args()

    setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    try:
        config = load_feed_config(args.config)
        logger.info(f"Mall: {config.cafe24.mall_id or '(unset)'}  mode={config.integrations_mode}  grant={config.cafe24.grant_mode.value}")

        page, current_refresh_token = asyncio.run(build(config, args.refresh_token))
        if args.refresh_token and current_refresh_token != args.refresh_token:
            report_rotated_refresh_token(current_refresh_token, args.refresh_token_file)

        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(page.html, encoding='utf-8')
        logger.info(f"Wrote {page.product_count} products ({page.pages_fetched} page(s)) to {args.output}")
        if page.truncated:
            logger.warning("Catalogue was truncated by catalogue.max_pages")
        return 0
    except FeedError as e:
        logger.error(f"Feed build failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
