"""
FastAPI REST API Module

HTTP front end for the banking system: register and select accounts,
deposit and withdraw, and read balances and transaction history.
"""

from typing import Optional
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
import uvicorn

from . import __version__
from .config import get_config
from .errors import (
    DuplicateAccount, InsufficientFunds, InvalidAccountDetails, InvalidAmount,
    LedgerOperationError, NotFound
)
from .formatting import HISTORY_COLUMNS, history_rows
from .logging_config import get_logger, setup_logging
from .schemas import (
    AccountListResponse, AccountModel, AccountSummaryModel, AmountRequest,
    BalanceResponse, HistoryResponse, RegisterAccountRequest,
    SelectAccountRequest, TransactionModel
)
from .system import BankingSystem


# Status code for each error kind
ERROR_STATUS = {
    InvalidAmount: 400,
    InvalidAccountDetails: 400,
    NotFound: 404,
    DuplicateAccount: 409,
    InsufficientFunds: 422,  # request was valid but the balance rejects it
}

router = APIRouter()


def get_banking_system(request: Request) -> BankingSystem:
    return request.app.state.banking_system


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AccountModel)
async def register_account(
    request: RegisterAccountRequest,
    system: BankingSystem = Depends(get_banking_system)
):
    """Create a new user account and make it active"""
    account = system.register_account(request.holder_name, request.account_number).unwrap()
    return AccountModel.from_account(account)


@router.get("", response_model=AccountListResponse)
async def list_accounts(system: BankingSystem = Depends(get_banking_system)):
    """All accounts in registration order"""
    active = system.active_account()
    return AccountListResponse(
        accounts=[AccountSummaryModel.from_summary(s) for s in system.list_accounts()],
        active_account_number=active.account_number if active else None,
    )


@router.get("/active", response_model=AccountModel)
async def get_active_account(system: BankingSystem = Depends(get_banking_system)):
    """Currently selected account"""
    active = system.active_account()
    if active is None:
        return JSONResponse(
            status_code=404,
            content={"detail": "No account selected. Please add a user to begin.",
                     "error_type": "no_active_account"},
        )
    return AccountModel.from_account(active)


@router.put("/active", response_model=AccountModel)
async def select_account(
    request: SelectAccountRequest,
    system: BankingSystem = Depends(get_banking_system)
):
    """Switch the active account"""
    account = system.select_account(request.account_number).unwrap()
    return AccountModel.from_account(account)


@router.get("/{account_number}", response_model=AccountModel)
async def get_account(account_number: str, system: BankingSystem = Depends(get_banking_system)):
    """Account holder, number and balance"""
    account = system.registry.get_account(account_number).unwrap()
    return AccountModel.from_account(account)


@router.get("/{account_number}/balance", response_model=BalanceResponse)
async def get_balance(account_number: str, system: BankingSystem = Depends(get_banking_system)):
    balance = system.get_balance(account_number).unwrap()
    return BalanceResponse.build(account_number, balance)


@router.get("/{account_number}/transactions", response_model=HistoryResponse)
async def get_transactions(account_number: str, system: BankingSystem = Depends(get_banking_system)):
    """Full history, oldest first, with display rows for table views"""
    history = system.get_history(account_number).unwrap()
    rows = history_rows(history, system.config.timestamp_format, system.config.display_tz())
    return HistoryResponse(
        account_number=account_number,
        columns=list(HISTORY_COLUMNS),
        transactions=[TransactionModel.from_transaction(t) for t in history],
        rows=[list(row) for row in rows],
    )


@router.post("/{account_number}/deposit", response_model=BalanceResponse)
async def deposit(
    account_number: str,
    request: AmountRequest,
    system: BankingSystem = Depends(get_banking_system)
):
    balance = system.deposit(account_number, request.amount).unwrap()
    return BalanceResponse.build(account_number, balance)


@router.post("/{account_number}/withdraw", response_model=BalanceResponse)
async def withdraw(
    account_number: str,
    request: AmountRequest,
    system: BankingSystem = Depends(get_banking_system)
):
    balance = system.withdraw(account_number, request.amount).unwrap()
    return BalanceResponse.build(account_number, balance)


def register_exception_handlers(app: FastAPI) -> None:
    """Map ledger errors to HTTP responses: {"detail", "error_type", ...}"""

    @app.exception_handler(LedgerOperationError)
    async def ledger_error_handler(request: Request, exc: LedgerOperationError) -> JSONResponse:
        return JSONResponse(
            status_code=ERROR_STATUS.get(type(exc.error), 400),
            content=exc.error.to_dict(),
        )


def create_app(system: Optional[BankingSystem] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Account Ledger API",
        description="Multi-account banking ledger with exact Decimal balances",
        version=__version__,
    )
    app.state.banking_system = system or BankingSystem()

    register_exception_handlers(app)
    app.include_router(router, prefix="/accounts", tags=["Accounts"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "account_ledger_api",
            "version": __version__,
            "currency": app.state.banking_system.config.currency_code,
            "accounts": len(app.state.banking_system.registry),
        }

    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Configure logging and serve the API with uvicorn"""
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format, log_file=config.log_file)

    host = host or config.api_host
    port = port or config.api_port
    get_logger("account_ledger.api").info(f"Starting Account Ledger API on {host}:{port}")

    uvicorn.run(create_app(BankingSystem(config)), host=host, port=port)
