"""Resources module for matching, decoding, resolving and caching."""

from lazy_resources.resources.predicates import default_predicate
from lazy_resources.resources.reader import read_utf8, read_utf8_stream, text_decoder
from lazy_resources.resources.resolver import Resolver
from lazy_resources.resources.cache import MemberCache

__all__ = [
    "default_predicate",
    "read_utf8",
    "read_utf8_stream",
    "text_decoder",
    "Resolver",
    "MemberCache",
]
