# blogclient/cli.py
"""
Command line front end.

Every command (except init-db) first restores the cached session, the
same way the app does on start, then acts on behalf of that user.

    blogclient register --name "Alice" --email a@x.com
    blogclient whoami
    blogclient posts create --title "Hello" --body "First post"
    blogclient logout
"""

import argparse
import asyncio
import getpass
import logging
import sys
import uuid

from blogclient.core.config import get_settings
from blogclient.core.errors import BlogClientError
from blogclient.main import BlogClient
from blogclient.schemas.content import BlogPostCreate
from blogclient.services.content_service import format_date, truncate_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blogclient", description="Community blog client")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create users / sessions / content tables")

    p = sub.add_parser("register", help="Create an account and log in")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password")
    p.add_argument("--gender")
    p.add_argument("--age", type=int)

    p = sub.add_parser("login", help="Log in on this device")
    p.add_argument("--email", required=True)
    p.add_argument("--password")

    sub.add_parser("logout", help="Log out on this device")
    sub.add_parser("whoami", help="Show the logged in user")
    sub.add_parser("sessions", help="List recent sessions of the logged in user")

    p = sub.add_parser("update-profile", help="Edit name, gender or age")
    p.add_argument("--name", dest="full_name")
    p.add_argument("--gender")
    p.add_argument("--age", type=int)

    sub.add_parser("change-password", help="Change the password")

    posts = sub.add_parser("posts", help="Blog posts").add_subparsers(dest="action", required=True)
    p = posts.add_parser("list")
    p.add_argument("--mine", action="store_true")
    p = posts.add_parser("create")
    p.add_argument("--title", required=True)
    p.add_argument("--body", required=True)
    p.add_argument("--sub-title")
    p.add_argument("--reference", help="JSON text")
    p = posts.add_parser("delete")
    p.add_argument("post_id", type=uuid.UUID)

    p = sub.add_parser("summarize", help="Summarize a text")
    p.add_argument("text")
    p.add_argument("--sentences", type=int, default=3)

    return parser


def _password(value: str | None, prompt: str = "Password: ") -> str:
    return value if value is not None else getpass.getpass(prompt)


async def _run(args: argparse.Namespace) -> None:
    client = await BlogClient.create()
    await client.startup()
    sessions = client.sessions

    if args.command == "register":
        result = await sessions.register(
            args.name, args.email, _password(args.password), gender=args.gender, age=args.age
        )
        print(f"Welcome, {result.user.full_name}!")

    elif args.command == "login":
        result = await sessions.login(args.email, _password(args.password))
        print(f"Logged in as {result.user.email}")

    elif args.command == "logout":
        await sessions.logout()
        print("Logged out")

    elif args.command == "whoami":
        user = client.context.user
        print(f"{user.full_name} <{user.email}> ({user.role})" if user else "Not logged in")

    elif args.command == "sessions":
        for session in await sessions.list_sessions():
            if session.logout_time is not None:
                status = f"logged out {format_date(session.logout_time)}"
            else:
                status = f"expires {format_date(session.expired_at)}"
            platform = session.device_info.get("platform", "?")
            print(f"{format_date(session.created_at)}  {platform}  {status}")

    elif args.command == "update-profile":
        updates = {
            key: getattr(args, key)
            for key in ("full_name", "gender", "age")
            if getattr(args, key) is not None
        }
        user = await sessions.update_user_profile(updates)
        print(f"Profile updated: {user.full_name}")

    elif args.command == "change-password":
        old = getpass.getpass("Current password: ")
        new = getpass.getpass("New password: ")
        await sessions.change_password(old, new)
        print("Password changed")

    elif args.command == "posts":
        await _posts(client, args)

    elif args.command == "summarize":
        print(await client.summarizer.summarize(args.text, args.sentences))


async def _posts(client: BlogClient, args: argparse.Namespace) -> None:
    if args.action == "list":
        for post in await client.content.list_posts(mine=args.mine):
            print(f"{post.id}  {format_date(post.created_at)}  {post.title}")
            print(f"    {truncate_text(post.body)}")
    elif args.action == "create":
        payload = BlogPostCreate(
            title=args.title,
            body=args.body,
            sub_title=args.sub_title,
            reference=args.reference,
        )
        post = await client.content.create_post(payload)
        print(f"Created post {post.id}")
    elif args.action == "delete":
        await client.content.delete_post(args.post_id)
        print("Deleted")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        if args.command == "init-db":
            from blogclient.database import create_db_and_tables

            create_db_and_tables()
            print("Tables ready")
        else:
            asyncio.run(_run(args))
    except (BlogClientError, ValueError) as exc:
        print(f"Error: {getattr(exc, 'message', exc)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
