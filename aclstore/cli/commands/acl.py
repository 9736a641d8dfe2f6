"""
ACL administration commands for the CLI.

These commands operate directly on the configured backend and bypass
HTTP authorization; they are meant for operators with access to the
store itself.
"""

import functools
import sys

import click

from ..utils import console, display_list, run_async

from aclstore.acl.store import CreateOutcome, KVACLStore
from aclstore.core.config import BackendType, get_config
from aclstore.core.exceptions import ACLStoreException
from aclstore.kv.factory import create_kv_store
from aclstore.manager.manager import Manager
from aclstore.manager.naming import meta_name


async def _with_manager(operation):
    """Open the configured backend, run operation(manager) and close the backend."""
    config = get_config()
    kv = create_kv_store(config.store)
    try:
        manager = await Manager.new_manager(KVACLStore(kv), config.manager.initial_admin_users)
        return await operation(manager)
    finally:
        await kv.close()


def store_errors(f):
    """Report store errors in red and exit with status 1."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ACLStoreException as e:
            console.print(f"[red]✗ {e.message}[/red]")
            sys.exit(1)
    return wrapper


def _warn_if_ephemeral():
    if get_config().store.backend == BackendType.MEMORY:
        console.print("[yellow]Warning: memory backend configured; changes are lost on exit[/yellow]")


@click.group()
def acl_group():
    """ACL administration commands.

    Commands for creating, inspecting and changing ACLs directly in the
    configured store.
    """
    pass


@acl_group.command(name='create')
@click.argument('name')
@click.argument('users', nargs=-1)
@store_errors
def create_acl(name, users):
    """Create ACL NAME (and its meta-ACL) with initial USERS.

    Nothing changes if the ACL already exists.

    Examples:
        aclstore acl create docs alice bob
    """
    _warn_if_ephemeral()
    outcome = run_async(_with_manager(lambda m: m.create_acl(name, *users)))
    if outcome == CreateOutcome.CREATED:
        console.print(f"[green]✓ Created ACL '{name}' and meta-ACL '{meta_name(name)}'[/green]")
    else:
        console.print(f"[yellow]ACL '{name}' already exists; left unchanged[/yellow]")


@acl_group.command(name='get')
@click.argument('name')
@store_errors
def get_acl(name):
    """Show the members of ACL NAME."""
    users = run_async(_with_manager(lambda m: m.get_acl(name)))
    display_list(f"ACL '{name}'", "User", users)


@acl_group.command(name='set')
@click.argument('name')
@click.argument('users', nargs=-1)
@store_errors
def set_acl(name, users):
    """Replace the members of ACL NAME with USERS."""
    _warn_if_ephemeral()
    run_async(_with_manager(lambda m: m.set_acl(name, list(users))))
    console.print(f"[green]✓ Set {len(set(users))} members on ACL '{name}'[/green]")


@acl_group.command(name='add')
@click.argument('name')
@click.argument('users', nargs=-1, required=True)
@store_errors
def add_users(name, users):
    """Add USERS to ACL NAME."""
    _warn_if_ephemeral()
    run_async(_with_manager(lambda m: m.modify_acl(name, add=list(users))))
    console.print(f"[green]✓ Added {', '.join(users)} to ACL '{name}'[/green]")


@acl_group.command(name='remove')
@click.argument('name')
@click.argument('users', nargs=-1, required=True)
@store_errors
def remove_users(name, users):
    """Remove USERS from ACL NAME."""
    _warn_if_ephemeral()
    run_async(_with_manager(lambda m: m.modify_acl(name, remove=list(users))))
    console.print(f"[green]✓ Removed {', '.join(users)} from ACL '{name}'[/green]")


@acl_group.command(name='list')
@store_errors
def list_acls():
    """List all ACL names."""
    names = run_async(_with_manager(lambda m: m.list_acls()))
    display_list("ACLs", "Name", names)
