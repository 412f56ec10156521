"""Text analysis command implementation."""

import json
import sys
from argparse import Namespace

from hostkit.config import HostConfig
from hostkit.text import analysis


FINDER_COMMANDS = {
    'dates': analysis.find_dates,
    'links': analysis.find_links,
    'phones': analysis.find_phone_numbers,
    'addresses': analysis.find_addresses,
    'analyze': analysis.analyze,
}


def text_command(args: Namespace, config: HostConfig) -> int:
    """Analyze text from the argument or stdin and print JSON."""
    text = args.text if args.text is not None else sys.stdin.read()

    if args.text_command == 'tokens':
        output = analysis.tokenize(text, unit=args.unit)
    else:
        output = [match.to_dict() for match in FINDER_COMMANDS[args.text_command](text)]

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0
