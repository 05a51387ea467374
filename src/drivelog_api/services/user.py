import logging
from datetime import datetime

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.company import Company
from db_models.user import User, UserProfile
from drivelog_api.core.cookie_auth import create_tokens, hash_password, verify_password
from drivelog_api.schemas.user import ProfileUpdate, UserLogin, UserSignUp

logger = logging.getLogger(__name__)


async def get_user_by_email(email: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_profile_by_email(email: str, db: AsyncSession) -> UserProfile | None:
    result = await db.execute(
        select(UserProfile).where(UserProfile.email == email.lower()).limit(1)
    )
    return result.scalar_one_or_none()


async def get_profile_of_user(user: User, db: AsyncSession) -> UserProfile | None:
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user.id))
    return result.scalar_one_or_none()


async def get_user_context(
    user: User, db: AsyncSession
) -> tuple[UserProfile | None, Company | None]:
    """Profile and company of an identity, both may be missing before onboarding"""
    profile = await get_profile_of_user(user, db)
    company = None
    if profile is not None and profile.company_id is not None:
        company = await db.get(Company, profile.company_id)
    return profile, company


def session_data(user: User, company: Company | None) -> dict:
    """Non-sensitive data exposed to the frontend through the session cookie"""
    return {
        "user": {"id": str(user.id), "email": user.email, "name": user.name},
        "company": {"id": str(company.id), "name": company.name} if company else None,
    }


async def authenticate_user(email: str, password: str, db: AsyncSession) -> User | None:
    user = await get_user_by_email(email, db)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password):
        return None
    return user


async def signup(body: UserSignUp, db: AsyncSession) -> dict:
    """
    Create an identity and link the profile an admin may have invited it with.

    Returns the identity, its profile and company, and a token pair.
    """
    email = body.email.lower()
    if await get_user_by_email(email, db) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    user = User(
        email=email,
        password=hash_password(body.password),
        name=body.name,
        is_active=True,
        last_connection=datetime.now(),
    )
    db.add(user)
    await db.flush()

    result = await db.execute(
        select(UserProfile)
        .where(UserProfile.email == email, UserProfile.user_id.is_(None))
        .order_by(UserProfile.created_at)
        .limit(1)
    )
    pending_profile = result.scalar_one_or_none()
    if pending_profile is not None:
        pending_profile.user_id = user.id
        logger.info(f"Linked invited profile {pending_profile.id} to user {user.id}")

    await db.commit()
    await db.refresh(user)
    profile, company = await get_user_context(user, db)
    logger.info(f"New user signed up: {user.id}")
    return {
        "user": user,
        "profile": profile,
        "company": company,
        "tokens": create_tokens(data={"sub": str(user.id)}),
    }


async def login_with_cookies(form_data: UserLogin, db: AsyncSession) -> dict:
    """Check the credentials and return the caller's data with a token pair"""
    user = await authenticate_user(form_data.email, form_data.password, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user.last_connection = datetime.now()
    await db.commit()
    await db.refresh(user)

    profile, company = await get_user_context(user, db)
    return {
        "user": user,
        "profile": profile,
        "company": company,
        "tokens": create_tokens(data={"sub": str(user.id)}),
    }


async def update_profile(
    user: User, profile: UserProfile | None, body: ProfileUpdate, db: AsyncSession
) -> tuple[User, UserProfile | None]:
    """
    Update name and email of the identity, and of its profile when there is one.

    The email must not be used by another identity or another profile,
    pending invitations included.
    """
    email = body.email.lower()
    if email != user.email or (profile is not None and email != profile.email):
        other_user = await get_user_by_email(email, db)
        query = select(UserProfile.id).where(UserProfile.email == email)
        if profile is not None:
            query = query.where(UserProfile.id != profile.id)
        result = await db.execute(query)
        if (other_user is not None and other_user.id != user.id) or result.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already in use",
            )

    user.name = body.name
    user.email = email
    if profile is not None:
        profile.name = body.name
        profile.email = email
    await db.commit()
    await db.refresh(user)
    if profile is not None:
        await db.refresh(profile)
    return user, profile
