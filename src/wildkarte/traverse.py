# Filesystem traversal for wildkarte.
# Turns a descriptor chain into a chain of stage functions and walks the
# real directory tree lazily, one directory listing at a time.
#
# Filesystem errors met while walking are never fatal: an entry that
# cannot be listed or stat'ed simply does not match.

from __future__ import annotations

import logging
import os
import posixpath
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from wildkarte.models import Descriptor, IgnorePredicate, Item, LiteralRun, Recursive, Wildcard

log = logging.getLogger(__name__)

# One step of the chain: takes a directory item, yields candidate items.
Stage = Callable[[Item], Iterator[Item]]


def _list_dir(item: Item) -> List[str]:
    # Names are sorted so a walk over an unchanged tree always yields the
    # same order, whatever the platform's listing order is.
    try:
        names = os.listdir(item.path)
    except OSError as exc:
        log.debug("cannot list %s: %s", item.path, exc)
        return []
    return sorted(names)


def _child(
    item: Item,
    name: str,
    directory_only: bool,
    ignore: Optional[IgnorePredicate],
) -> Optional[Item]:
    # Build the child item and apply the per-entry filters.
    child = Item.from_path(posixpath.join(item.path, name), name)
    if child is None:
        return None
    if directory_only and not child.is_dir:
        return None
    if ignore is not None and ignore(child):
        return None
    return child


def _literal_stage(descriptor: LiteralRun, ignore: Optional[IgnorePredicate]) -> Stage:
    parts = descriptor.fragment.split("/")

    def literal(item: Item) -> Iterator[Item]:
        if ignore is None:
            # Fast path: one stat for the whole run.
            found = Item.from_path(posixpath.normpath(posixpath.join(item.path, descriptor.fragment)))
        else:
            # Every directory along the run must survive the ignore predicate.
            found = item
            for part in parts:
                found = Item.from_path(posixpath.normpath(posixpath.join(found.path, part)))
                if found is None or ignore(found):
                    return
        if found is None:
            return
        if descriptor.directory_only and not found.is_dir:
            return
        yield found

    return literal


def _wildcard_stage(descriptor: Wildcard, ignore: Optional[IgnorePredicate]) -> Stage:
    matcher = descriptor.matcher

    def wildcard(item: Item) -> Iterator[Item]:
        if not item.is_dir:
            return
        for name in _list_dir(item):
            if not matcher.matches(name):
                continue
            child = _child(item, name, descriptor.directory_only, ignore)
            if child is not None:
                yield child

    return wildcard


def _recursive_stage(descriptor: Recursive, ignore: Optional[IgnorePredicate]) -> Stage:
    directory_only = descriptor.directory_only

    def recursive(item: Item) -> Iterator[Item]:
        # Zero levels deep: the item itself.
        if item.is_dir or not directory_only:
            yield item
        if not item.is_dir:
            return
        # Depth-first with an explicit stack so tree depth is not bounded by
        # the interpreter's recursion limit. A directory is listed only once
        # the consumer asks for the item after it.
        stack: List[Tuple[Item, Iterator[str]]] = [(item, iter(_list_dir(item)))]
        while stack:
            parent, names = stack[-1]
            name = next(names, None)
            if name is None:
                stack.pop()
                continue
            child = _child(parent, name, directory_only, ignore)
            if child is None:
                continue
            yield child
            if child.is_dir:
                stack.append((child, iter(_list_dir(child))))

    return recursive


def build_stages(
    descriptors: Iterable[Descriptor],
    ignore: Optional[IgnorePredicate] = None,
) -> Tuple[Stage, ...]:
    # One closure per descriptor, in traversal order.
    stages: List[Stage] = []
    for descriptor in descriptors:
        if isinstance(descriptor, Recursive):
            stages.append(_recursive_stage(descriptor, ignore))
        elif isinstance(descriptor, Wildcard):
            stages.append(_wildcard_stage(descriptor, ignore))
        elif isinstance(descriptor, LiteralRun):
            stages.append(_literal_stage(descriptor, ignore))
        else:
            raise TypeError(f"Unknown descriptor: {descriptor!r}")
    return tuple(stages)


def walk(stages: Sequence[Stage], item: Item, index: int = 0) -> Iterator[Item]:
    # Feed the directory outputs of each stage into the next one.
    # Everything the last stage produces is a result.
    if not stages:
        yield item
        return

    stage = stages[index]
    if index + 1 == len(stages):
        yield from stage(item)
        return

    for child in stage(item):
        if child.is_dir:
            yield from walk(stages, child, index + 1)
