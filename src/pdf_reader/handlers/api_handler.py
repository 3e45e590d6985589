from aws_lambda_powertools.event_handler import APIGatewayHttpResolver, CORSConfig
from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from pdf_reader.config.app import AppConfig
from pdf_reader.handlers import handle_convert
from pdf_reader.middleware.error_handler import error_handler_middleware
from pdf_reader.middleware.logging import logging_middleware
from pdf_reader.models.api import ConvertResponse, VersionResponse
from pdf_reader.pdf_processor import engine_bootstrap

# --- Constants and Setup ---
logger = Logger()

# --- Load Configuration ---
try:
    app_config = AppConfig.from_env()
    logger.info(
        "Configuration loaded successfully.",
        extra={
            "app_env": app_config.app_env,
            "version": app_config.version,
            "commit_hash": app_config.commit_hash,
        },
    )
except Exception as e:
    logger.exception("CRITICAL: Failed to load configuration.")
    # This error prevents the Lambda from functioning, raise to indicate failure
    raise RuntimeError(f"Initialization error: {e}") from e

# Configure CORS
cors_config = CORSConfig(
    allow_origin=app_config.cors_allow_origin,
    allow_headers=["Content-Type", "Authorization"],
)

# Initialize API Gateway resolver
app = APIGatewayHttpResolver(cors=cors_config, enable_validation=True)


# --- API Route Handlers ---
@app.get("/version")
def get_version() -> VersionResponse:
    """Returns the application version."""
    display_version = app_config.display_version
    logger.info(f"Version requested: {display_version}")
    return VersionResponse(version=display_version)


@app.post("/convert/<mode>")
def post_convert(mode: str) -> ConvertResponse:
    """Handle POST /convert/{mode}.

    Converts the uploaded PDF (multipart field 'file') into canvas slots,
    plain text, positioned HTML or page images.
    """
    return handle_convert(
        app=app,
        app_config=app_config,
        bootstrap=engine_bootstrap,
        logger=logger,
        mode=mode,
    )


# --- Main Lambda Entry Point ---
@error_handler_middleware
@logging_middleware
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Main Lambda handler function.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway proxy response
    """
    return app.resolve(event, context)
