"""
Anlık Eleman - CLI Entry Point.

Sign in or up against the hosted platform and browse active job postings.
"""

import asyncio
from getpass import getpass

from dotenv import load_dotenv

load_dotenv()

from anlik_eleman.auth import AuthState, PlatformAuthGateway, SessionStore, online_check_for
from anlik_eleman.config import settings
from anlik_eleman.db import jobs
from anlik_eleman.db.rows import JobFilters
from anlik_eleman.logging_setup import configure_logging
from anlik_eleman.remote import PlatformClient

COMMANDS = "Commands: /signin, /signup, /signout, /me, /jobs [city], /quit"


def describe(state: AuthState) -> str:
    """One-line summary of the current user."""
    if state.error:
        return f"[{state.phase.value}] Hata: {state.error}"
    if state.profile:
        p = state.profile
        return f"[{state.phase.value}] {p.full_name or state.user.email} ({p.user_type}, {p.city or '-'})"
    if state.user:
        return f"[{state.phase.value}] {state.user.email}"
    return f"[{state.phase.value}] Giriş yapılmadı"


async def prompt(label: str) -> str:
    return (await asyncio.to_thread(input, label)).strip()


async def sign_up(store: SessionStore) -> None:
    email = await prompt("E-posta: ")
    password = await asyncio.to_thread(getpass, "Şifre: ")
    attributes = {
        "first_name": await prompt("Ad: "),
        "last_name": await prompt("Soyad: "),
        "city": await prompt("Şehir: "),
        "user_type": (await prompt("Hesap türü (job_seeker/employer) [job_seeker]: ")) or "job_seeker",
    }
    if attributes["user_type"] == "employer":
        attributes["company_name"] = await prompt("Şirket adı: ")

    result = await store.sign_up(email, password, attributes)
    if result.error:
        print(f"Kayıt başarısız: {result.error.message}")
    elif result.data and not result.data.is_confirmed:
        print("Kayıt alındı. Lütfen e-posta adresinizi doğrulayın.")
    else:
        print(describe(store.state))


async def sign_in(store: SessionStore) -> None:
    email = await prompt("E-posta: ")
    password = await asyncio.to_thread(getpass, "Şifre: ")
    result = await store.sign_in(email, password)
    if result.error:
        print(f"Giriş başarısız: {result.error.message}")
    else:
        print(describe(store.state))


async def list_jobs(client: PlatformClient, city: str | None) -> None:
    result = await jobs.list_job_postings(client, JobFilters(city=city or None, limit=10))
    if result.error:
        print(f"Hata: {result.error.message}")
        return
    if not result.data:
        print("İlan bulunamadı")
        return
    for posting in result.data:
        company = (posting.company or {}).get("name", "-")
        print(f"- {posting.title} | {company} | {posting.city} | {posting.job_type}")


async def run() -> None:
    """Run the interactive CLI."""
    print("Anlık Eleman")
    print("=" * 40)

    configure_logging(settings.log_level)
    try:
        client = PlatformClient(settings)
    except ValueError as e:
        print(f"Error: {e}")
        return

    store = SessionStore(PlatformAuthGateway(client), online_check=online_check_for(client.url))
    print("\nInitializing...")
    await store.init()
    print(describe(store.state))

    print(COMMANDS)
    print("-" * 40)

    try:
        while True:
            try:
                user_input = await prompt("> ")
            except (KeyboardInterrupt, EOFError):
                break
            if not user_input:
                continue

            command, _, arg = user_input.partition(" ")
            command = command.lower()
            if command == "/quit":
                break
            elif command == "/signin":
                await sign_in(store)
            elif command == "/signup":
                await sign_up(store)
            elif command == "/signout":
                result = await store.sign_out()
                print(result.error.message if result.error else "Çıkış yapıldı")
            elif command == "/me":
                print(describe(store.state))
            elif command == "/jobs":
                await list_jobs(client, arg.strip())
            else:
                print(COMMANDS)
    finally:
        store.dispose()
        await client.aclose()

    print("Hoşça kalın!")


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
