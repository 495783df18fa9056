#!/usr/bin/env python3
"""
PR Review Server

Flask server that turns GitHub pull request links into AI code review reports.
"""

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from pr_review_server.config import load_app_config, setup_logging
from pr_review_server.server import create_app


logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()

    try:
        config = load_app_config()
    except ValueError as e:
        # 설정 로드 전이므로 기본 로깅으로 출력
        logging.basicConfig(level=logging.ERROR)
        logger.error(str(e))
        sys.exit(1)

    setup_logging(config.logging)

    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    app = create_app(config)

    logger.info(f"PR Review Server running at {config.server.base_url}")
    logger.info("Ready to accept pull request review requests.")
    logger.info("   - Health Check: GET /health")
    logger.info("   - Generate Review: POST /review-pull-request")
    logger.info("   - Stored Reports: GET /reviews/<filename>")

    app.run(
        host=config.server.host,
        port=config.server.port,
        debug=config.debug
    )


if __name__ == '__main__':
    main()
