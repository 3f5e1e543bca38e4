#!/usr/bin/env python3
"""Helpdesk API client - command line entry point."""
import logging

import click
from colorama import Fore, Style, init

from config import app_config
from helpdesk_client import HelpdeskApi, HelpdeskError, PageOptions
from helpdesk_client.schema.models import Group, User

# Initialize colorama
init(autoreset=True)

SEARCH_MODELS = {"user": User, "group": Group}


def print_banner():
    """Print application banner."""
    print(f"{Fore.CYAN}{'=' * 44}")
    print(f"{Fore.CYAN}║   {Fore.WHITE}Helpdesk API Client{Fore.CYAN}                  ║")
    print(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    print()


def make_client() -> HelpdeskApi:
    try:
        return HelpdeskApi.from_config(app_config.api)
    except HelpdeskError as e:
        fail(e)


def page_options(page, per_page):
    if page is None and per_page is None:
        return None
    return PageOptions(page=page, per_page=per_page)


def print_page(title, page, describe):
    """Print one page of results plus its paging summary."""
    click.echo(f"{Fore.YELLOW}{title} ({len(page)} shown, {page.count} total)")
    for item in page:
        click.echo(f"  {describe(item)}")
    options = page.next_page_options()
    if options is not None and options.page is not None:
        hint = f"--page {options.page}"
        if options.per_page:
            hint = f"{hint} --per-page {options.per_page}"
        click.echo(f"{Fore.CYAN}  next: {hint}")


def fail(error: HelpdeskError):
    click.echo(f"{Fore.RED}❌ {type(error).__name__}: {error}")
    raise click.exceptions.Exit(1)


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Helpdesk API client - inspect brands, groups, memberships and users."""
    logging.basicConfig(level=getattr(logging, app_config.log_level, logging.WARNING))


@cli.command()
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@click.option("--per-page", type=click.IntRange(min=1), help="Page size")
def brands(page, per_page):
    """List brands."""
    with make_client() as api:
        try:
            result = api.brands.get_brands(page_options(page, per_page))
        except HelpdeskError as e:
            fail(e)
    print_page("Brands", result, lambda b: f"{str(b.id):>10}  {b.name}  ({b.subdomain})")


@cli.command()
@click.option("--assignable", is_flag=True, help="Only groups assignable by the current user")
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@click.option("--per-page", type=click.IntRange(min=1), help="Page size")
def groups(assignable, page, per_page):
    """List groups."""
    paging = page_options(page, per_page)
    with make_client() as api:
        try:
            if assignable:
                result = api.groups.get_assignable_groups(paging)
            else:
                result = api.groups.get_groups(paging)
        except HelpdeskError as e:
            fail(e)
    print_page("Groups", result, lambda g: f"{str(g.id):>10}  {g.name}")


@cli.command()
@click.option("--user-id", type=int, help="Memberships of one user")
@click.option("--group-id", type=int, help="Memberships of one group")
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@click.option("--per-page", type=click.IntRange(min=1), help="Page size")
def memberships(user_id, group_id, page, per_page):
    """List group memberships."""
    if user_id is not None and group_id is not None:
        raise click.UsageError("Use either --user-id or --group-id, not both")

    paging = page_options(page, per_page)
    with make_client() as api:
        try:
            if user_id is not None:
                result = api.groups.get_group_memberships_by_user(user_id, paging)
            elif group_id is not None:
                result = api.groups.get_group_memberships_by_group(group_id, paging)
            else:
                result = api.groups.get_group_memberships(paging)
        except HelpdeskError as e:
            fail(e)

    def describe(m):
        marker = f" {Fore.GREEN}[default]" if m.default else ""
        return f"{str(m.id):>10}  user={m.user_id} group={m.group_id}{marker}"

    print_page("Group memberships", result, describe)


@cli.command()
@click.argument("query")
@click.option("--type", "search_type", type=click.Choice(sorted(SEARCH_MODELS)), default="user")
def search(query, search_type):
    """Search users or groups."""
    with make_client() as api:
        try:
            result = api.search.search_for(query, SEARCH_MODELS[search_type])
        except HelpdeskError as e:
            fail(e)
    print_page(f"Search '{query}'", result, lambda r: f"{str(r.id):>10}  {r.name}")


@cli.command()
def whoami():
    """Show the authenticated user."""
    with make_client() as api:
        try:
            user = api.users.get_current_user()
        except HelpdeskError as e:
            fail(e)
    role = user.role.value if hasattr(user.role, "value") else user.role
    click.echo(f"{Fore.GREEN}✅ {user.name} <{user.email}> ({role})")


@cli.command()
def config_api():
    """Configure helpdesk API credentials."""
    print_banner()

    click.echo(f"{Fore.YELLOW}Helpdesk API Configuration")
    click.echo(f"{Fore.YELLOW}{'=' * 30}")

    site = click.prompt("Site URL", default=app_config.api.site or None)
    email = click.prompt("Email", default=app_config.api.email or None)
    api_token = click.prompt("API token", hide_input=True, default="", show_default=False)

    app_config.api.site = site
    app_config.api.email = email
    app_config.api.api_token = api_token

    try:
        app_config.api.to_credentials().validate()
    except HelpdeskError as e:
        fail(e)

    click.echo(f"{Fore.GREEN}✅ Configuration saved!")


if __name__ == "__main__":
    cli()
