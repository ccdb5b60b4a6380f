# File: main.py
"""
main.py

Entry point of the log console. Loads config, connects to Docker, resolves the
containers of the configured compose service ('project/service') or single
container, and runs the curses loop that feeds key presses to LogsView.

Usage: python main.py [project/service | container]
"""
import curses
import sys
import time

import docker
from docker.errors import DockerException

from config_migrate import migrate_config, validate_config
from display import CursesScreen, key_event_from_curses
from event_log import EventLog
from log_feed import DockerService, namespaced
from logs_view import LogsView
from version_check import LOCAL_VERSION, check_version


def load_config(path='config.json'):
    return validate_config(migrate_config(path))


class Console:
    """Parent of the logs view: selection, resource, flash line and exit."""

    def __init__(self, screen, resource, selection):
        self.screen = screen
        self.resource = resource
        self.selection = selection
        self.running = True

    def get_selection(self):
        return self.selection

    def get_resource(self):
        return self.resource

    def flash(self, level, msg):
        self.screen.flash(level, msg)

    def show_page(self, page):
        self.screen.message = ''
        self.screen.show(page)

    def switch_back(self):
        self.running = False


def run(stdscr, cfg, service, containers, version_status):
    curses.curs_set(0)
    stdscr.nodelay(True)
    stdscr.keypad(True)

    selection = cfg['resource']
    event_log = EventLog(cfg['event_log'], debug=cfg['debug'])
    title = f"=== logs {selection}  version={LOCAL_VERSION} ({version_status}) ==="
    screen = CursesScreen(stdscr, title)
    service.event_log = event_log
    console = Console(screen, service, selection)
    view = LogsView(console, cfg, event_log=event_log)
    for name in containers:
        view.add_container(name)
    screen.hints = view.hints()
    event_log.info(selection, f"Console started with {len(containers)} container(s)")
    view.init()

    try:
        while console.running:
            evt = key_event_from_curses(screen.read_key())
            if evt is not None:
                view.keyboard(evt)
            screen.expire_flash()
            time.sleep(0.05)
    except KeyboardInterrupt:
        pass
    finally:
        view.delete_all_pages()
        event_log.info(selection, "Console stopped")


def main():
    cfg = load_config()
    if len(sys.argv) > 1:
        cfg['resource'] = sys.argv[1]

    try:
        client = docker.from_env()
    except DockerException as e:
        print(f"Error: cannot connect to Docker daemon: {e}", file=sys.stderr)
        sys.exit(1)

    service = DockerService(client)
    try:
        containers = service.containers(*namespaced(cfg['resource']))
    except DockerException as e:
        print(f"Error: cannot resolve '{cfg['resource']}': {e}", file=sys.stderr)
        sys.exit(1)
    if not containers:
        print(f"No running containers for '{cfg['resource']}'", file=sys.stderr)
        sys.exit(1)

    version_status = check_version(cfg['version_api'])
    curses.wrapper(run, cfg, service, containers, version_status)
    print('Exiting...')


if __name__ == '__main__':
    main()
