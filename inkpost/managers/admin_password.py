"""
Admin password hash generator.

Prints the ``ADMIN_PASSWORD_HASH`` line for the single admin account so it
can be pasted into ``.env``. The plaintext password is never stored.

Usage:
    python -m inkpost.managers.admin_password
    python -m inkpost.managers.admin_password --password Secret123
    python -m inkpost.managers.admin_password --generate

Interactive Mode (no arguments):
    python -m inkpost.managers.admin_password
    # Script will prompt for the password twice
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from getpass import getpass
from secrets import token_urlsafe
from sys import exit as sys_exit

from inkpost.managers.password_manager import get_password_hasher

MIN_PASSWORD_LENGTH = 8


def generate_secure_password(length: int = 16) -> str:
    """
    Generate a secure random password.

    Parameters
    ----------
    length : int
        Number of random bytes (default: 16).

    Returns
    -------
    str
        URL-safe random password.
    """
    return token_urlsafe(length)


def input_password() -> str:
    """Prompt until two matching passwords of sufficient length are entered."""
    while True:
        password = getpass("Enter admin password: ")
        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters.")
            continue
        confirm = getpass("Confirm password: ")
        if password != confirm:
            print("❌ Passwords do not match.")
            continue
        return password


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Generate the Argon2 hash for the admin account",
        formatter_class=RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m inkpost.managers.admin_password --generate\n"
            "  python -m inkpost.managers.admin_password --password Secret123\n"
        ),
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--password", "-p", help="Password to hash")
    group.add_argument(
        "--generate",
        "-g",
        action="store_true",
        help="Generate a random password and print it once",
    )
    return parser


def resolve_password(args: Namespace) -> tuple[str, bool]:
    """
    Pick the password from arguments, generation or an interactive prompt.

    Returns:
        tuple[str, bool]: The password and whether it was generated
    """
    if args.generate:
        return generate_secure_password(), True
    if args.password is not None:
        return args.password, False
    return input_password(), False


def main(argv: list[str] | None = None) -> int:
    """
    Entry point.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)
    password, generated = resolve_password(args)

    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return 1

    if generated:
        print(f"✅ Auto-generated password: {password}")
        print("⚠️  Please save this password now! You won't see it again.")

    print(f"ADMIN_PASSWORD_HASH={get_password_hasher().hash(password)}")
    return 0


if __name__ == "__main__":
    sys_exit(main())
