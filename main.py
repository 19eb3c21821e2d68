"""
Entry point for the User Directory Backend
"""

import sys
import os
import argparse
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from config import settings

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the user directory API or its dashboard")
    parser.add_argument("--frontend", action="store_true", help="Serve the dashboard instead of the API")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--api-base-url", default=settings.API_BASE_URL, help="API the dashboard reads from")
    return parser.parse_args(argv)

def main(argv=None):
    import uvicorn

    args = parse_args(argv)
    if args.frontend:
        from frontend.dashboard import create_dashboard_app
        port = args.port or settings.FRONTEND_PORT
        application = create_dashboard_app(args.api_base_url)
        logger.info(f"Starting User Directory dashboard on port {port}")
    else:
        from app import app as application
        port = args.port or settings.PORT
        logger.info(f"Starting User Directory Backend on port {port}")

    # uvicorn turns SIGTERM/SIGINT into lifespan shutdown, which closes the pool
    uvicorn.run(application, host=args.host, port=port, access_log=False, server_header=False)

if __name__ == "__main__":
    main()
