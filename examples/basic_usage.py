"""
Descope Auth Python SDK - Basic Usage Example

This example demonstrates OTP and enchanted link sign in with the
Descope Auth Python SDK.
"""

import asyncio
import logging

from descope_auth import (
    DescopeClient,
    DescopeConfig,
    DescopeError,
    DeliveryMethod,
    ENCHANTED_LINK_EXPIRED,
    INVALID_OTP_CODE,
    error_matches,
)


async def otp_example(client: DescopeClient) -> None:
    """One time code example."""
    print("=== OTP Example ===\n")

    try:
        masked = await client.otp.sign_in(DeliveryMethod.EMAIL, "user@example.com")
        print(f"Code sent to: {masked}")

        code = input("Code: ")
        result = await client.otp.verify(DeliveryMethod.EMAIL, "user@example.com", code)
        print(f"Signed in (first time: {result.is_first_authentication})")
    except DescopeError as e:
        if error_matches(INVALID_OTP_CODE, e):
            print("Wrong code")
        else:
            print(f"Error: {e}")


async def enchanted_link_example(client: DescopeClient) -> None:
    """Enchanted link example, waiting for the link to be clicked."""
    print("\n=== Enchanted Link Example ===\n")

    try:
        response = await client.enchanted_link.sign_in("user@example.com")
        print(f"Click link {response.link_id} sent to {response.masked_email}")

        result = await client.enchanted_link.poll_for_session(response.pending_ref, timeout=60)
        print(f"Signed in, refresh token present: {result.refresh_token is not None}")
    except DescopeError as e:
        if error_matches(ENCHANTED_LINK_EXPIRED, e):
            print("Link was not clicked in time")
        else:
            print(f"Error: {e}")


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    # Reads DESCOPE_PROJECT_ID (and optionally DESCOPE_BASE_URL)
    async with DescopeClient(DescopeConfig.from_env(debug=True)) as client:
        await otp_example(client)
        await enchanted_link_example(client)


if __name__ == "__main__":
    asyncio.run(main())
