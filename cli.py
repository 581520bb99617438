"""
Command-line console for credvault.

Provides a text-based menu for:
- User registration and login checks
- Account administration (list, enable/disable, change email, delete)
- AES key generation, text encryption and decryption
- One-way hashing of text
"""

import logging
from getpass import getpass
from typing import Optional

from accounts.config import Settings, get_settings
from accounts.hashing import create_hasher
from accounts.manager import AccountManager
from accounts.models import User
from accounts.storage import JSONStorage
from crypto import CipherMode, CredVaultError, HashAlgorithm, decrypt, encrypt, generate_key, hash_text


def create_account_manager(settings: Optional[Settings] = None) -> AccountManager:
    settings = settings or get_settings()
    storage = JSONStorage(settings.USERS_FILE)
    hasher = create_hasher(settings.PASSWORD_SCHEME)
    return AccountManager(storage, hasher, settings)


def print_menu() -> None:
    print("\n" + "=" * 50)
    print("  credvault")
    print("=" * 50)
    print("  1) Sign up")
    print("  2) Check login")
    print("  3) List users")
    print("  4) Enable / disable a user")
    print("  5) Change a user's email")
    print("  6) Delete a user")
    print("  7) Generate AES key")
    print("  8) Encrypt text")
    print("  9) Decrypt text")
    print(" 10) Hash text")
    print("  0) Quit")
    print("=" * 50)


def _describe(user: User) -> str:
    return f"{user.username} <{user.email}> [{user.state.value}] id={user.user_id}"


def _select_user(accounts: AccountManager) -> Optional[User]:
    username = input("Username: ").strip()
    user = accounts.find_by_username(username) if username else None
    if user is None:
        print(f"User '{username}' not found")
    return user


def _select_mode() -> CipherMode:
    legacy = input("Use legacy ECB mode? (yes/no) [no]: ").strip().lower()
    return CipherMode.ECB_LEGACY if legacy == "yes" else CipherMode.GCM


def handle_signup(accounts: AccountManager) -> None:
    print("\nCreate New Account")
    username = input("Username: ").strip()
    email = input("Email: ").strip()
    password = getpass("Password: ")
    confirm = getpass("Confirm password: ")
    if password != confirm:
        print("Passwords don't match")
        return

    user = accounts.register(username, email, password)
    print(f"Account created: {user.username}")
    print(f"   User ID: {user.user_id}")


def handle_login(accounts: AccountManager) -> None:
    print("\nLogin check")
    username = input("Username: ").strip()
    password = getpass("Password: ")
    if accounts.authenticate(username, password):
        print(f"Credentials accepted for {username}")
    else:
        print("Invalid credentials")


def handle_list_users(accounts: AccountManager) -> None:
    users = accounts.find_all()
    if not users:
        print("   No users registered")
        return
    for user in sorted(users, key=lambda u: u.created_at):
        print(f"   - {_describe(user)}")


def handle_toggle(accounts: AccountManager) -> None:
    user = _select_user(accounts)
    if user is None:
        return
    updated = accounts.disable(user.user_id) if user.enabled else accounts.enable(user.user_id)
    print(f"{updated.username} is now {updated.state.value}")


def handle_change_email(accounts: AccountManager) -> None:
    user = _select_user(accounts)
    if user is None:
        return
    email = input("New email: ").strip()
    updated = accounts.update(user.user_id, email=email)
    print(f"Email for {updated.username} is now {updated.email}")


def handle_delete(accounts: AccountManager) -> None:
    user = _select_user(accounts)
    if user is None:
        return
    confirm = input(f"Delete '{user.username}'? (yes/no): ").strip().lower()
    if confirm != "yes":
        print("   Cancelled")
        return
    accounts.delete(user.user_id)
    print("User deleted")


def handle_generate_key() -> None:
    print(f"\nNew AES-256 key (keep it secret):\n{generate_key()}")


def handle_encrypt() -> None:
    plaintext = input("Text to encrypt: ")
    key = getpass("Key: ").strip()
    print(f"\n{encrypt(plaintext, key, _select_mode())}")


def handle_decrypt() -> None:
    ciphertext = input("Ciphertext: ").strip()
    key = getpass("Key: ").strip()
    print(f"\n{decrypt(ciphertext, key, _select_mode())}")


def handle_hash() -> None:
    text = input("Text to hash: ")
    print(f"\nSHA-256: {hash_text(text, HashAlgorithm.PRIMARY)}")


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    accounts = create_account_manager(settings)

    handlers = {
        "1": lambda: handle_signup(accounts),
        "2": lambda: handle_login(accounts),
        "3": lambda: handle_list_users(accounts),
        "4": lambda: handle_toggle(accounts),
        "5": lambda: handle_change_email(accounts),
        "6": lambda: handle_delete(accounts),
        "7": handle_generate_key,
        "8": handle_encrypt,
        "9": handle_decrypt,
        "10": handle_hash,
    }

    while True:
        print_menu()
        choice = input("> ").strip()
        if choice == "0":
            print("\nGoodbye!")
            break
        handler = handlers.get(choice)
        if handler is None:
            print("Invalid choice")
            continue
        try:
            handler()
        except CredVaultError as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    main()
