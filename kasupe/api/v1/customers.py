"""Customer auth API router: signup, login, me."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_customer, get_db
from kasupe.auth.jwt import create_token_pair
from kasupe.auth.passwords import hash_password, verify_password
from kasupe.models.user import CUSTOMER_ROLE, Customer
from kasupe.schemas.auth import (
    CustomerAuthResponse,
    CustomerResponse,
    CustomerSignupRequest,
    LoginRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


def _auth_response(customer: Customer) -> CustomerAuthResponse:
    tokens = create_token_pair(str(customer.id), customer.email, customer.role)
    return CustomerAuthResponse(
        user=CustomerResponse.model_validate(customer),
        tokens=TokenResponse(**tokens),
    )


@router.post("/signup", response_model=CustomerAuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: CustomerSignupRequest, db: AsyncSession = Depends(get_db)) -> CustomerAuthResponse:
    """Register a customer account and log it in."""
    result = await db.execute(select(Customer).where(Customer.email == body.email))
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    customer = Customer(
        full_name=body.full_name,
        email=body.email,
        phone=body.phone,
        hashed_password=hash_password(body.password),
        role=CUSTOMER_ROLE,
    )
    db.add(customer)
    await db.flush()
    await db.refresh(customer)

    logger.info("Customer %s signed up", customer.id)
    return _auth_response(customer)


@router.post("/login", response_model=CustomerAuthResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)) -> CustomerAuthResponse:
    """Authenticate an active customer with email and password."""
    result = await db.execute(select(Customer).where(Customer.email == body.email, Customer.is_active.is_(True)))
    customer = result.scalar_one_or_none()

    if customer is None or not verify_password(body.password, customer.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _auth_response(customer)


@router.get("/me", response_model=CustomerResponse)
async def me(customer: Customer = Depends(get_current_customer)) -> CustomerResponse:
    return CustomerResponse.model_validate(customer)
