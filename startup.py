import logging
import os
import sys
import traceback

import uvicorn

# Configure logging to stdout so container platforms pick it up
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Add the src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)


def report(message: str, level: int = logging.INFO) -> None:
    """Print with flush and log, so startup output appears immediately."""
    print(message, flush=True)
    logger.log(level, message)


def _flag(name: str) -> str:
    return '✅ set' if os.environ.get(name) else '❌ not set'


report("=" * 60)
report("Acko-MER AI Backend Startup")
report("=" * 60)
report(f"Python version: {sys.version.split()[0]}")
report(f"Current directory: {current_dir}")
report(f"Source path: {src_path}")

# Log critical environment variables (without exposing secrets)
report("\nEnvironment Configuration:")
report(f"  PORT: {os.environ.get('PORT', 'not set')}")
report(f"  APP_ENV: {os.environ.get('APP_ENV', 'not set')}")
report(f"  MONGO_URI: {_flag('MONGO_URI')}")
report(f"  MONGO_DB_NAME: {os.environ.get('MONGO_DB_NAME', 'not set')}")
report(f"  REDIS_URL: {_flag('REDIS_URL')}")
report(f"  AZURE_OPENAI_ENDPOINT: {_flag('AZURE_OPENAI_ENDPOINT')}")
report(f"  AZURE_OPENAI_API_KEY: {_flag('AZURE_OPENAI_API_KEY')}")
report(f"  AZURE_OPENAI_DEPLOYMENT_NAME: {os.environ.get('AZURE_OPENAI_DEPLOYMENT_NAME', 'not set')}")
report(f"  AZURE_SPEECH_SUBSCRIPTION_KEY: {_flag('AZURE_SPEECH_SUBSCRIPTION_KEY')}")
report(f"  AZURE_SPEECH_REGION: {os.environ.get('AZURE_SPEECH_REGION', 'not set')}")

if __name__ == "__main__":
    try:
        # Settings validation errors surface here, before the server starts
        report("Step 1: Loading application settings...")
        try:
            from ackomer.core.config import get_settings
            settings = get_settings()
        except ValueError as ve:
            report(f"❌ Configuration validation failed: {ve}", logging.ERROR)
            report(traceback.format_exc(), logging.ERROR)
            report("\n⚠️  Common configuration issues:", logging.ERROR)
            report("  1. APP_ENV must be development, staging, production or testing", logging.ERROR)
            report("  2. AZURE_OPENAI_ENDPOINT must start with https://", logging.ERROR)
            report("  3. CORS_ALLOWED_ORIGINS must be a JSON array or comma-separated list", logging.ERROR)
            sys.exit(1)

        report(f"  App name: {settings.app_name}")
        report(f"  App version: {settings.app_version}")
        report(f"  App environment: {settings.app_env}")
        report(f"  Debug mode: {settings.debug}")

        report("Step 2: Importing ackomer.app...")
        try:
            from ackomer.app import app  # noqa: F401
        except Exception as import_error:
            report(f"❌ Failed to import ackomer.app: {import_error}", logging.ERROR)
            report(traceback.format_exc(), logging.ERROR)
            sys.exit(1)
        report("✅ Successfully imported ackomer.app")

        port = int(os.environ.get("PORT", settings.port))
        host = os.environ.get("HOST", settings.host)

        sep = "=" * 60
        report(f"\n{sep}")
        report(f"Step 3: Starting uvicorn server on {host}:{port}...")
        report(f"{sep}\n")
        uvicorn.run(
            "ackomer.app:app",
            host=host,
            port=port,
            workers=1,
            log_level=settings.logging.level.lower(),
            access_log=True,
            timeout_keep_alive=75,
            timeout_graceful_shutdown=30,
        )
    except KeyboardInterrupt:
        report("\n⚠️  Shutting down due to keyboard interrupt")
        sys.exit(0)
    except Exception as e:
        report(f"❌ CRITICAL: Failed to start application: {type(e).__name__}: {e}", logging.ERROR)
        report(traceback.format_exc(), logging.ERROR)
        sys.exit(1)
