"""
GTT Bank API Application Factory
"""

from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import BankConfig, get_config
from ..service import BankingService
from ..sessions import SessionStore
from .auth import router as auth_router
from .accounts import router as accounts_router
from .transactions import router as transactions_router


def create_app(
    service: Optional[BankingService] = None,
    config: Optional[BankConfig] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application
    
    Args:
        service: Banking service to serve; built from config if not provided
        config: Configuration; defaults to the service's, then the global one
    """
    if config is None:
        config = service.config if service else get_config()
    if service is None:
        service = BankingService.from_config(config)
    
    app = FastAPI(
        title=f"{config.bank_name} API",
        description="Deposits, withdrawals, balances and transaction history",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.banking_service = service
    app.state.session_store = SessionStore(
        timeout=timedelta(minutes=config.session_timeout_minutes)
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include routers
    app.include_router(auth_router, prefix="/auth", tags=["Auth"])
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transactions_router, prefix="/transactions", tags=["Transactions"])
    
    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "gtt_bank_api",
            "version": __version__
        }

    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": config.bank_name,
            "version": __version__,
            "account_creation": config.allow_account_creation,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "auth": "/auth",
                "accounts": "/accounts",
                "transactions": "/transactions",
            }
        }
    
    return app
