from linkshortener.cli.app import Shell, main


__all__ = [
    'Shell',
    'main',
]
