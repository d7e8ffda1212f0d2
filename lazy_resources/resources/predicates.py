"""Matching rules deciding which resource answers a member request."""

from pathlib import PurePosixPath

from lazy_resources.models import MemberDescriptor


def default_predicate(resource_name: str, member: MemberDescriptor) -> bool:
    """Match a resource whose extension-less name ends with the member name.

    The comparison is case-insensitive, so a fully qualified name such as
    ``Group.SampleResource.txt`` matches a member named ``SampleResource``
    (or ``sampleresource``). Only the last extension is stripped.

    Args:
        resource_name: Dot-qualified resource name from the catalog
        member: Descriptor of the requested member

    Returns:
        True if the resource answers the member request

    Example:
        >>> default_predicate("Group.SampleResource.txt", MemberDescriptor("SampleResource"))
        True
        >>> default_predicate("Group.Other.txt", MemberDescriptor("SampleResource"))
        False
    """
    stem = PurePosixPath(resource_name).stem
    return stem.casefold().endswith(member.name.casefold())
