"""Interactive command shell for the link shortener

Reads one command per line from stdin and dispatches it onto a
ShortenerService. The session token of the last successful `login` is kept
for account-scoped commands (`create`, `mylinks`).

Commands:
    register <login> <password>   register a new user
    login <login> <password>      log in and keep the session token
    create <url> <limit>          create a short link (logged-in users only)
    open <short link>             follow a short link (code or full short URL)
    mylinks                       list the current user's links
    exit                          stop the shell (also on EOF)

Example:
    $ LINKSHORTENER_DATA_DIR=/tmp/links linkshortener
    > register alice pw1
    Registered. Log in to continue.
    > login alice pw1
    Logged in. Your token: 6f1c2d3e-...
    > create https://example.com 2
    Short link: clck.ru/k3Xa9Q
"""

import os
import sys
import logging
import argparse
import webbrowser
from collections.abc import Callable, Iterable

from linkshortener.constants import ENV, Backend
from linkshortener.dao.serialization import format_timestamp
from linkshortener.dao.exceptions import (
    DataStoreError,
    LinkNotFoundError,
    LinkExpiredError,
    LinkQuotaExhaustedError,
    ShortcodeGenerationError,
    UserAlreadyExistsError,
    UserDoesNotExistError,
    InvalidCredentialsError,
)
from linkshortener.exceptions import InvalidInputError, ConfigurationError
from linkshortener.service import ShortenerService
from linkshortener.types import RedirectTransport
from linkshortener.utils import config
from linkshortener.utils.logging import initialize_logging


logger = logging.getLogger(__name__)


COMMANDS = ('register', 'login', 'create', 'open', 'mylinks', 'exit')

USAGE = {
    'register': 'Usage: register <login> <password>',
    'login': 'Usage: login <login> <password>',
    'create': 'Usage: create <url> <limit>',
    'open': 'Usage: open <short link>',
    'mylinks': 'Usage: mylinks',
    'exit': 'Usage: exit',
}

BANNER = """=== Link Shortener ===
Commands:
  register <login> <password>   register a new user
  login <login> <password>      log in
  create <url> <limit>          create a short link (logged-in users only)
  open <short link>             follow a short link
  mylinks                       show my links
  exit                          quit"""


class Shell:
    """Read-eval loop over a ShortenerService

    Args:
        service (ShortenerService):
            Service the commands are dispatched onto.

        transport (Callable[[str], Any], optional):
            Hands a target URL to the environment. Defaults to webbrowser.open.

        output (Callable[[str], None], optional):
            Line printer. Defaults to print.
    """

    def __init__(
        self,
        service: ShortenerService,
        transport: RedirectTransport = webbrowser.open,
        output: Callable[[str], None] = print,
    ):
        self.service = service
        self.transport = transport
        self.output = output
        self.token: str | None = None

    def run(self, lines: Iterable[str]) -> None:
        self.output(BANNER)
        for line in lines:
            if not self.handle(line):
                break
        else:
            # EOF
            self.output('Shutting down...')

    def handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the shell should stop."""
        args = line.split()
        if not args:
            return True

        command, *params = args
        command = command.lower()
        if command == 'exit':
            self.output('Shutting down...')
            return False
        if command not in COMMANDS:
            self.output(f'Unknown command. Enter one of: {", ".join(COMMANDS)}')
            return True

        handler = getattr(self, f'_do_{command}')
        handler(params)
        return True

    # -------------------------------
    # Commands
    # -------------------------------

    def _do_register(self, params: list[str]) -> None:
        if len(params) != 2:
            self.output(USAGE['register'])
            return
        try:
            self.service.register(*params)
        except UserAlreadyExistsError:
            self.output('Error: a user with this login already exists.')
        except InvalidInputError as e:
            self.output(f'Error: {e}')
        else:
            self.output('Registered. Log in to continue.')

    def _do_login(self, params: list[str]) -> None:
        if len(params) != 2:
            self.output(USAGE['login'])
            return
        try:
            self.token = self.service.login(*params)
        except InvalidCredentialsError:
            self.output('Error: wrong login or password.')
        else:
            self.output(f'Logged in. Your token: {self.token}')

    def _do_create(self, params: list[str]) -> None:
        if self.token is None:
            self.output('Error: log in first to create links.')
            return
        if len(params) != 2:
            self.output(USAGE['create'])
            return

        url, limit = params
        if not limit.lstrip('+-').isdigit():
            self.output('Error: the limit must be a number.')
            return
        try:
            link = self.service.create_link(self.token, url, limit)
        except (InvalidInputError, ShortcodeGenerationError, UserDoesNotExistError) as e:
            self.output(f'Error: {e}')
        else:
            self.output(f'Short link: {self.service.short_url(link.code)}')
            self.output(f'Valid until: {format_timestamp(link.expires_at)}')

    def _do_open(self, params: list[str]) -> None:
        if len(params) != 1:
            self.output(USAGE['open'])
            return
        try:
            link = self.service.open_link(params[0])
        except LinkNotFoundError:
            self.output('Error: link not found.')
            return
        except LinkExpiredError:
            self.output('Error: the link has expired.')
            return
        except LinkQuotaExhaustedError:
            self.output('Error: the click limit is exhausted.')
            return

        self.output(f'Redirecting to: {link.target_url}')
        try:
            self.transport(link.target_url)
        except (webbrowser.Error, OSError) as e:
            logger.warning('Redirect transport failed.', extra={'shortcode': link.code, 'error': str(e)})
            self.output(f'Error opening the link: {e}')

    def _do_mylinks(self, params: list[str]) -> None:
        if self.token is None:
            self.output('Error: log in first to see your links.')
            return
        if params:
            self.output(USAGE['mylinks'])
            return

        links = self.service.my_links(self.token)
        if not links:
            self.output('You have no links.')
            return
        self.output('Your links:')
        for link in links:
            self.output(
                f'- {self.service.short_url(link.code)} '
                f'(remaining: {link.clicks_remaining}, until: {format_timestamp(link.expires_at)})'
            )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='linkshortener', description='Interactive link shortener shell.')
    parser.add_argument('--data-dir', help=f'Directory holding users.json and links.json (env: {ENV.App.DATA_DIR}).')
    parser.add_argument(
        '--backend',
        choices=[str(backend) for backend in Backend],
        help=f'Snapshot backend (env: {ENV.App.BACKEND}, default: file).',
    )
    parser.add_argument('--log-level', help=f'Log level (env: {ENV.App.LOG_LEVEL}, default: WARNING).')
    parser.add_argument('--log-format', choices=['json', 'text'], help=f'Log record format (env: {ENV.App.LOG_FORMAT}, default: json).')
    parser.add_argument('--sweep-interval', type=float, help=f'Seconds between expiry sweeps (env: {ENV.App.SWEEP_INTERVAL}).')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, lines: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    initialize_logging(args.log_level or os.environ.get(ENV.App.LOG_LEVEL) or 'WARNING', args.log_format)

    try:
        app_config = config.load_config(backend=args.backend)
        if args.data_dir and 'file' in app_config:
            app_config['file']['data_dir'] = args.data_dir
        overrides = {} if args.sweep_interval is None else {'sweep_interval': args.sweep_interval}
        service = ShortenerService.from_config(app_config, **overrides)
    except (ConfigurationError, ValueError) as e:
        logger.error('Failed to configure the link shortener.', extra={'error': str(e)})
        print(f'Configuration error: {e}', file=sys.stderr)
        return 2
    except DataStoreError as e:
        logger.error('Snapshot backend unavailable at startup.', extra={'error': str(e)})
        print(f'Storage error: {e}', file=sys.stderr)
        return 1

    with service:
        Shell(service).run(sys.stdin if lines is None else lines)
    return 0


if __name__ == '__main__':
    sys.exit(main())
