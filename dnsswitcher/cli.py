import signal
import sys

import click

# Use relative imports to avoid module loading conflicts
from . import __version__, config
from .logging_config import setup_logging
from .menu import is_selected, select_interface
from .network import (
    NetworkCommandError,
    apply_profile,
    get_dns_servers,
    list_network_services,
)
from .profiles import (
    ConfigFileError,
    MalformedDocumentError,
    ensure_config_file,
    get_config_path,
    read_configuration,
    restore_defaults,
    save_configuration,
)


def signal_handler(signum, frame):
    """Handle interrupt signals gracefully."""
    signal_name = signal.Signals(signum).name
    click.echo(f"\n\nReceived {signal_name}. Exiting gracefully...")
    sys.exit(0)


# --- Helper Functions ---


def _fail(message):
    click.echo(click.style(message, fg="red"), err=True)
    sys.exit(1)


def _load_configuration(preferences):
    """Load the profiles file, creating it from the defaults on first use."""
    path = get_config_path(preferences)
    try:
        if ensure_config_file(path):
            click.echo(f"Created default profiles file at {path}", err=True)
        return path, read_configuration(path)
    except (ConfigFileError, MalformedDocumentError) as e:
        _fail(f"Error: {e}")


def _list_services(preferences):
    try:
        return list_network_services(preferences)
    except NetworkCommandError as e:
        _fail(f"Error: {e}. {e.output}".strip())


# --- CLI Commands ---


class OrderedGroup(click.Group):
    """Custom Click group that preserves command order."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


@click.group(cls=OrderedGroup)
@click.option("--debug", is_flag=True, help="Enable verbose debug logging.")
@click.version_option(__version__, prog_name=config.APP_NAME)
@click.pass_context
def cli(ctx, debug):
    """
    DNS Switcher - switch DNS server profiles on macOS.

    Profiles are named lists of DNS servers kept in ~/.dnsswitcher.json.
    Each one can also carry a command to run before its servers are applied,
    for example to bring a VPN up first.
    """
    preferences = config.load_preferences()
    if debug:
        preferences["settings"]["debug"] = True
    setup_logging(debug=config.get_setting(preferences, "debug"), force_reinit=True)
    ctx.obj = preferences


@cli.command()
@click.pass_obj
def run(preferences):
    """
    Start the menu-bar application.

    The menu lists every profile; choosing Load applies it to the selected
    interface. Edits to the profiles file are picked up automatically.
    """
    # Import here so the rest of the CLI works without the GUI stack
    from .app import main

    main(debug=config.get_setting(preferences, "debug"))


@cli.command(name="list")
@click.pass_obj
def list_profiles(preferences):
    """
    List the configured DNS profiles.

    Every profile matching the selected interface's current servers is marked
    with an asterisk.
    """
    _, configuration = _load_configuration(preferences)
    if not configuration.settings:
        click.echo(
            click.style(
                "No profiles configured. Run `dnsswitcher restore-defaults` to start over.",
                fg="yellow",
            )
        )
        return

    current = get_dns_servers(configuration.interface, preferences)
    for profile in configuration.settings:
        marker = "*" if is_selected(profile, current) else " "
        servers = ", ".join(profile.servers) or "(DHCP)"
        click.echo(f"{marker} {profile.name}: {servers}")
        if profile.load_cmd:
            click.echo(f"    runs: {profile.load_cmd}")


@cli.command()
@click.pass_obj
def show(preferences):
    """Print the profiles file as it would be saved."""
    _, configuration = _load_configuration(preferences)
    text = configuration.export()
    if text is None:
        _fail("Error: configuration could not be serialized.")
    click.echo(text, nl=False)


@cli.command()
@click.pass_obj
def interfaces(preferences):
    """List the network services; the selected one is marked with an asterisk."""
    _, configuration = _load_configuration(preferences)
    for name in _list_services(preferences):
        marker = "*" if name == configuration.interface else " "
        click.echo(f"{marker} {name}")


@cli.command(name="set-interface")
@click.argument("name")
@click.pass_obj
def set_interface(preferences, name):
    """Select the network service whose DNS servers are managed."""
    path, configuration = _load_configuration(preferences)
    services = _list_services(preferences)
    if name not in services:
        _fail(f"Unknown interface '{name}'. Available: {', '.join(services)}")

    configuration.interface = name
    if not save_configuration(configuration, path):
        _fail(f"Error saving configuration file {path}")
    click.echo(click.style(f"Interface set to '{name}'.", fg="green"))


@cli.command()
@click.argument("name")
@click.pass_obj
def apply(preferences, name):
    """
    Apply the profile called NAME to the selected interface.

    If the profile has a load command it runs first; the DNS servers are only
    changed when it succeeds.
    """
    _, configuration = _load_configuration(preferences)
    profile = configuration.find_profile(name)
    if profile is None:
        names = ", ".join(p.name for p in configuration.settings)
        _fail(f"Unknown profile '{name}'. Available: {names}")

    select_interface(configuration, _list_services(preferences))
    _, message = apply_profile(configuration.interface, profile, preferences)
    if message:
        _fail(message)
    click.echo(
        click.style(
            f"Applied '{profile.name}' to '{configuration.interface}'.", fg="green"
        )
    )


@cli.command()
@click.pass_obj
def current(preferences):
    """Show the DNS servers currently set on the selected interface."""
    _, configuration = _load_configuration(preferences)
    servers = get_dns_servers(configuration.interface, preferences)
    click.echo(f"Interface: {configuration.interface}")
    if servers:
        for server in servers:
            click.echo(f"  {server}")
    else:
        click.echo("  No DNS servers set (using DHCP)")


@cli.command(name="restore-defaults")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def restore_defaults_command(preferences, yes):
    """Overwrite the profiles file with the bundled default profiles."""
    path = get_config_path(preferences)
    if not yes and not click.confirm(f"Replace {path} with the default profiles?"):
        click.echo("Aborted.")
        return
    try:
        restore_defaults(path)
    except ConfigFileError as e:
        _fail(f"Error: {e}")
    click.echo(click.style("Default profiles restored.", fg="green"))


@cli.command()
@click.pass_obj
def path(preferences):
    """Print the location of the profiles file."""
    click.echo(str(get_config_path(preferences)))


def main():
    # Set up signal handlers
    signal.signal(signal.SIGINT, signal_handler)  # Ctrl+C
    signal.signal(signal.SIGTERM, signal_handler)  # Termination signal
    cli(prog_name=config.APP_NAME)


if __name__ == "__main__":
    main()
