import os
import sys

# Ensure system paths are in the PATH when launched from Finder, which has a minimal environment
os.environ["PATH"] = "/usr/bin:/bin:/usr/sbin:/sbin:" + os.environ.get("PATH", "")

import rumps

from . import __version__, config, menu
from .logging_config import setup_logging, get_logger, get_log_file
from .network import (
    NetworkCommandError,
    apply_profile,
    get_dns_servers,
    list_network_services,
)
from .profiles import (
    ConfigFileError,
    ConfigFileMonitor,
    Configuration,
    MalformedDocumentError,
    ensure_config_file,
    get_config_path,
    read_configuration,
    restore_defaults,
    save_configuration,
)
from .utils import run_command


# Get module logger
logger = get_logger(__name__)


class DNSSwitcherApp(rumps.App):
    """Menu-bar application that switches DNS profiles."""

    def __init__(self, preferences=None, *args, **kwargs):
        """Initializes the DNS Switcher application."""
        # rumps needs a name; the Quit item is provided by our own menu
        kwargs.setdefault("name", config.APP_TITLE)
        kwargs.setdefault("title", "DNS")
        kwargs.setdefault("quit_button", None)
        super(DNSSwitcherApp, self).__init__(*args, **kwargs)

        self.preferences = preferences or config.load_preferences()
        self.config_path = get_config_path(self.preferences)
        self.monitor = ConfigFileMonitor(self.config_path)
        self.configuration = None
        # Message of the last failed load, None once a load succeeds
        self.load_error = None
        self.interfaces = []

        # Rendered menu items, keyed by title, for re-highlighting
        self.profile_items = {}
        self.interface_items = {}

        refresh_seconds = float(config.get_setting(self.preferences, "refresh_seconds"))
        self.refresh_timer = rumps.Timer(self.refresh, refresh_seconds)

        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    # --- Startup ---

    def start(self):
        """Seed the profiles file, discover services and build the first menu."""
        try:
            if ensure_config_file(self.config_path):
                self.logger.info(f"Created default profiles file {self.config_path}")
        except ConfigFileError as e:
            self.logger.critical(f"Critical error: failed to create default config file: {e}")
            sys.exit(1)

        try:
            self.interfaces = list_network_services(self.preferences)
        except NetworkCommandError as e:
            self.logger.critical(f"Critical error: {e}: {e.output}")
            sys.exit(1)

        # First check always reports a change
        self.monitor.has_changed()
        self.reload()
        self.refresh_timer.start()

    # --- Configuration ---

    def reload(self):
        """
        Re-read the profiles file and rebuild the menu.

        A file that cannot be loaded keeps the last good configuration. The
        alert is shown once per distinct error; a missing file is retried on
        every tick without raising it again.
        """
        try:
            self.configuration = read_configuration(self.config_path)
        except (MalformedDocumentError, ConfigFileError) as e:
            error = str(e)
            if error == self.load_error:
                self.highlight_current_dns_servers()
                return

            self.load_error = error
            self.logger.error(f"Could not load {self.config_path}: {e}")
            rumps.alert(
                title="Configuration Error",
                message=f"{e}\n\nEdit the file or restore the default servers.",
            )
            if self.configuration is None:
                self.configuration = Configuration()
        else:
            if self.load_error is not None:
                self.logger.info(f"Loaded {self.config_path} again")
            self.load_error = None

        self.build_menu()

    def save(self):
        """Persist the current configuration; failures are only logged."""
        if save_configuration(self.configuration, self.config_path):
            self.monitor.mark_current()

    def refresh(self, _):
        """Timer callback: reload on file changes, otherwise just re-highlight."""
        if self.monitor.has_changed():
            self.reload()
        else:
            # The DNS servers may have been changed outside the app
            self.highlight_current_dns_servers()

    # --- Menu construction ---

    def build_menu(self):
        """Render the menu model into rumps menu items."""
        menu.select_interface(self.configuration, self.interfaces)
        current = get_dns_servers(self.configuration.interface, self.preferences)
        entries = menu.build_menu(self.configuration, current, __version__)

        self.profile_items = {}
        self.interface_items = {}
        items = [self._render_entry(entry) for entry in entries]

        try:
            self.menu.clear()
        except Exception as e:
            self.logger.error(f"Menu clear error: {e}")
        self.menu = items

    def _render_entry(self, entry):
        if isinstance(entry, menu.Separator):
            return None

        if isinstance(entry, menu.ProfileEntry):
            return self._render_profile(entry)

        if entry.title == menu.INTERFACE_MENU_TITLE:
            return self._render_interfaces()

        handlers = {
            menu.MenuAction.EDIT: self.edit_servers,
            menu.MenuAction.RESTORE_DEFAULTS: self.restore_default_servers,
            menu.MenuAction.OPEN_LOG: self.open_log_file,
            menu.MenuAction.QUIT: self.quit_app,
        }
        return rumps.MenuItem(entry.title, callback=handlers.get(entry.action))

    def _render_profile(self, entry):
        profile = entry.profile
        item = rumps.MenuItem(profile.name)
        item.state = int(entry.selected)

        children = []
        for child in menu.profile_submenu_entries(profile):
            if isinstance(child, menu.Separator):
                children.append(None)
            elif child.action == menu.MenuAction.LOAD:
                children.append(
                    rumps.MenuItem(child.title, callback=lambda _, p=profile: self.load_profile(p))
                )
            else:
                # No callback renders the line disabled
                children.append(rumps.MenuItem(child.title))
        item.update(children)

        self.profile_items[profile.name] = item
        return item

    def _render_interfaces(self):
        parent = rumps.MenuItem(menu.INTERFACE_MENU_TITLE)
        children = []
        for name in self.interfaces:
            child = rumps.MenuItem(name, callback=self.set_interface)
            child.state = int(name == self.configuration.interface)
            self.interface_items[name] = child
            children.append(child)
        parent.update(children)
        return parent

    # --- Highlighting ---

    def highlight_enabled_interface(self):
        for name, item in self.interface_items.items():
            item.state = int(name == self.configuration.interface)

    def highlight_current_dns_servers(self):
        current = get_dns_servers(self.configuration.interface, self.preferences)
        for entry in menu.build_profile_entries(self.configuration, current):
            item = self.profile_items.get(entry.title)
            if item is not None:
                item.state = int(entry.selected)

    # --- Callbacks ---

    def set_interface(self, sender):
        """Select the network service whose DNS servers we manage."""
        self.logger.info(f"Interface changed to '{sender.title}'")
        self.configuration.interface = sender.title
        self.highlight_enabled_interface()
        self.save()
        self.highlight_current_dns_servers()

    def load_profile(self, profile):
        """Apply a profile to the selected interface."""
        self.logger.info(f"Loading profile '{profile.name}'")
        _, message = apply_profile(self.configuration.interface, profile, self.preferences)
        if message:
            rumps.alert(title="Error", message=message)
        self.highlight_current_dns_servers()

    def edit_servers(self, _):
        """Open the profiles file in the default editor."""
        result = run_command(["open", str(self.config_path)])
        if not result.ok:
            rumps.alert(title="Error", message=f"Could not open {self.config_path}: {result.output}")

    def restore_default_servers(self, _):
        """Replace the profiles file with the bundled defaults."""
        try:
            restore_defaults(self.config_path)
        except ConfigFileError as e:
            self.logger.error(str(e))
            rumps.alert(title="Error", message=str(e))
            return
        self.monitor.mark_current()
        self.reload()

    def open_log_file(self, _):
        """Open the log file in the default application (usually Console.app)."""
        log_file = get_log_file()
        result = run_command(["open", str(log_file)])
        if result.ok:
            self.logger.info(f"Opened log file: {log_file}")

    def quit_app(self, _):
        self.logger.info("Quit selected")
        rumps.quit_application()


def main(debug=False):
    """Main function to run the app."""
    preferences = config.load_preferences()
    setup_logging(
        debug=debug or config.get_setting(preferences, "debug"), force_reinit=True
    )

    app = DNSSwitcherApp(preferences)

    # Hide from dock - this prevents the Python icon from appearing in the dock
    import AppKit

    try:
        shared_app = AppKit.NSApplication.sharedApplication()
        shared_app.setActivationPolicy_(AppKit.NSApplicationActivationPolicyAccessory)
        logger.debug("Set application activation policy to hide from dock")
    except Exception as e:
        logger.warning(f"Could not hide from dock: {e}")

    app.start()
    app.run()


if __name__ == "__main__":
    main()
