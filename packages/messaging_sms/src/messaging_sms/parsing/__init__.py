"""
SMS Response Parsing

Per-gateway grammars that turn raw vendor text into an Outcome.
"""

from messaging_sms.contracts.payloads import Gateway
from messaging_sms.parsing.cdac import cdac_parser, parse_delivery_report
from messaging_sms.parsing.grammar import GrammarRule, ResponseParser
from messaging_sms.parsing.nic import nic_parser

_PARSER_FACTORIES = {
    Gateway.CDAC: cdac_parser,
    Gateway.NIC: nic_parser,
}


def default_parsers() -> dict[Gateway, ResponseParser]:
    return {gateway: factory() for gateway, factory in _PARSER_FACTORIES.items()}


__all__ = [
    "GrammarRule",
    "ResponseParser",
    "cdac_parser",
    "nic_parser",
    "default_parsers",
    "parse_delivery_report",
]
