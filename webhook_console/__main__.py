"""Allow ``python -m webhook_console`` as an alias of the ``webhook-console`` script."""

from webhook_console.cli.main import main

main()
