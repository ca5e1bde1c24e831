"""
Basic Session Example - Log in, restore after restart, log out.

Runs against a local backend (STOREFRONT_BASE_URL, default
http://localhost:8000/api) with the token kept in ~/.storefront.
"""

import asyncio
import logging
import os

from storefront_auth import ApiError, LoginRequest, create_session


def show(level, message):
    print(f"[{level}] {message}")


async def main():
    logging.basicConfig(level=logging.INFO)

    session = create_session(notifier=show)
    session.subscribe(lambda snap: print(f"  state={snap.state.value} loading={snap.loading}"))

    # Restore a token persisted by a previous run
    user = await session.restore()
    if user:
        print(f"Welcome back, {user.full_name or user.username}")
    else:
        try:
            await session.login(LoginRequest(
                email=os.environ.get("STOREFRONT_EMAIL", "alice@example.com"),
                password=os.environ.get("STOREFRONT_PASSWORD", "secret"),
            ))
        except ApiError as e:
            print(f"Login failed ({e.status}): {session.error}")
            await session.client.aclose()
            return

        print(f"Logged in as {session.user.username} ({session.user.role})")
        print(f"Back-office access: {session.user.can_access_admin}")

    # Logout
    await session.sign_out()
    print(f"Authenticated after logout: {session.is_authenticated}")

    await session.client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
