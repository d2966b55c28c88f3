"""Scan engine: walks a tree and builds the source units its profiles match."""

from __future__ import annotations

import os
import stat
from typing import List, Sequence, Set, Tuple

from .config import ScanConfig, default_config
from .errors import ManifestError, ScanError
from .logging import get_logger
from .pathutil import rel_abs_path
from .profiles import ALL_PROFILES, Profile
from .units import Unit, unit_type
from .walk import WalkControl, WalkEntry, walk_tree


class Scanner:
    """Finds source units beneath a directory according to a configuration."""

    def __init__(self, config: ScanConfig | None = None) -> None:
        self.config = config if config is not None else default_config()
        self.logger = get_logger("scanner")

    def scan(self, root: str | os.PathLike[str]) -> List[Unit]:
        """Return every unit found beneath ``root``.

        The tree is walked once per profile. The order of the result is
        not meaningful; use :func:`srcscan.units.sort_units` for display.
        """
        root_path = os.path.abspath(os.path.expanduser(os.fspath(root)))
        self._check_root(root_path, os.fspath(root))

        base = self.config.resolved_base()
        profiles: Sequence[Profile] = (
            self.config.profiles if self.config.profiles is not None else ALL_PROFILES
        )

        found: List[Unit] = []
        seen: Set[Tuple[str, str]] = set()
        for profile in profiles:
            self.logger.debug("Scanning %s for %s units", root_path, profile.name)
            walk_tree(
                root_path,
                self._visitor(profile, base, found, seen),
                enter=self._enter_filter(profile),
            )

        self.logger.debug("Scan of %s found %d units", root_path, len(found))
        return found

    @staticmethod
    def _check_root(root_path: str, original: str) -> None:
        try:
            mode = os.stat(root_path).st_mode
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Scan root not found: {original}") from exc
        except OSError as exc:
            raise ScanError(f"stat {original}: {exc}") from exc
        if not stat.S_ISDIR(mode):
            raise NotADirectoryError(f"Scan root is not a directory: {original}")

    def _enter_filter(self, profile: Profile):
        def _enter(path: str, name: str) -> bool:
            if self.config.skip_dir(name):
                return False
            # File-only profiles that are top-level-only see the root's files alone.
            return not (profile.top_level_only and profile.dir_matcher is None)

        return _enter

    def _visitor(
        self,
        profile: Profile,
        base: str,
        found: List[Unit],
        seen: Set[Tuple[str, str]],
    ):
        def _visit(entry: WalkEntry) -> WalkControl:
            if entry.is_dir:
                if profile.dir_matcher is not None and profile.dir_matcher.dir_matches(
                    entry.path, entry.names
                ):
                    self._build(profile, entry.path, base, found, seen)
                    if profile.top_level_only:
                        return WalkControl.SKIP_SUBTREE
                return WalkControl.CONTINUE

            if profile.file_matcher is not None and profile.file_matcher.file_matches(entry.path):
                self._build(profile, entry.path, base, found, seen)
            return WalkControl.CONTINUE

        return _visit

    def _build(
        self,
        profile: Profile,
        path: str,
        base: str,
        found: List[Unit],
        seen: Set[Tuple[str, str]],
    ) -> None:
        rel_path, abs_path = rel_abs_path(path, base)
        try:
            unit = profile.builder.build(abs_path, rel_path, self.config)
        except ManifestError as exc:
            if not self.config.skip_bad_manifests:
                raise
            self.logger.warning("Skipping %s at %s: %s", profile.name, rel_path, exc)
            return

        key = (unit_type(unit), unit.path)
        if key in seen:
            self.logger.debug("Ignoring duplicate %s at %s", key[0], key[1])
            return
        seen.add(key)
        self.logger.debug("Found %s at %s", profile.name, rel_path)
        found.append(unit)


def scan(root: str | os.PathLike[str], config: ScanConfig | None = None) -> List[Unit]:
    """Scan ``root`` with ``config`` (or the default configuration)."""
    return Scanner(config).scan(root)


__all__ = ["Scanner", "scan"]
