"""Rename transaction: manifest, then imports, then package cache."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from change_project_name.config import Config
from change_project_name.core.discovery import find_source_files
from change_project_name.core.errors import RenameError, UnexpectedIOFailure
from change_project_name.core.manifest import update_manifest_name
from change_project_name.core.models import (
    CandidateFile,
    RenameRequest,
    RenameState,
    RenameSummary,
)
from change_project_name.core.package_cache import update_package_cache
from change_project_name.core.platform import (
    ANDROID_BUILD_GRADLE,
    IOS_PROJECT_FILE,
    update_android_application_id,
    update_ios_bundle_id,
)
from change_project_name.core.rewriter import reference_marker, rewrite_references
from change_project_name.notifications.base import ConsoleNotifier, Notifier
from change_project_name.runners.refresh import RefreshRunner
from change_project_name.utils.files import read_text, write_text

logger = logging.getLogger(__name__)

STEP_DESCRIPTIONS = {
    RenameState.IDLE: "starting",
    RenameState.UPDATING_MANIFEST: "updating the manifest",
    RenameState.UPDATING_IMPORTS: "updating package imports",
    RenameState.UPDATING_PLATFORM_IDS: "updating platform identifiers",
    RenameState.UPDATING_CACHE: "updating the package cache",
}


class ProjectRenamer:
    """Runs one rename transaction against a project directory.

    Steps run strictly in order and there is no rollback: if a step fails,
    the earlier steps stay applied. In dry-run mode every decision is made
    and reported but nothing is written.
    """

    def __init__(
        self,
        project_root: Path,
        config: Config | None = None,
        notifier: Notifier | None = None,
        refresh_runner: RefreshRunner | None = None,
    ) -> None:
        self.project_root = project_root.resolve()
        self.config = config or Config.load(project_root=self.project_root)
        self.notifier = notifier or ConsoleNotifier()
        self.refresh_runner = refresh_runner
        self.state = RenameState.IDLE

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.config.manifest_file

    @property
    def package_cache_path(self) -> Path:
        return self.project_root / self.config.package_cache_file

    def _enter(self, state: RenameState) -> None:
        logger.debug(f"Rename state: {self.state.value} -> {state.value}")
        self.state = state

    async def rename(self, request: RenameRequest) -> RenameSummary:
        """Rename the project from ``request.old_name`` to ``request.new_name``.

        Returns:
            RenameSummary describing what was (or would be) changed

        Raises:
            RenameError: If any step fails; the cause is chained
        """
        self.state = RenameState.IDLE
        summary = RenameSummary(dry_run=request.dry_run)

        if request.is_noop:
            self.notifier.success(f'Project name is already "{request.new_name}". Nothing to change.')
            self._enter(RenameState.DONE)
            return summary

        dry_run = request.dry_run
        self.notifier.info(
            f'{"Planning" if dry_run else "Starting"} project rename from '
            f'"{request.old_name}" to "{request.new_name}"...'
        )

        try:
            self._enter(RenameState.UPDATING_MANIFEST)
            summary.manifest_updated = self._update_manifest(request)

            self._enter(RenameState.UPDATING_IMPORTS)
            self._update_imports(request, summary)

            if self.config.update_platform_ids:
                self._enter(RenameState.UPDATING_PLATFORM_IDS)
                self._update_platform_ids(request, summary)

            self._enter(RenameState.UPDATING_CACHE)
            await self._update_cache(request, summary)
        except Exception as e:
            step = STEP_DESCRIPTIONS.get(self.state, self.state.value)
            self._enter(RenameState.FAILED)
            raise RenameError(
                f'An error occurred during project rename from "{request.old_name}" '
                f'to "{request.new_name}" while {step}: {e}'
            ) from e

        self._enter(RenameState.DONE)
        if dry_run:
            self.notifier.success(
                f'Analysis complete! Project would be renamed to "{request.new_name}".',
                "Run without --dry-run to make these changes",
            )
        else:
            self.notifier.success(f'Done! Project successfully renamed to "{request.new_name}".')
        return summary

    def _update_manifest(self, request: RenameRequest) -> bool:
        manifest_name = self.config.manifest_file
        self.notifier.info(f"{'Would update' if request.dry_run else 'Updating'} {manifest_name}...")

        try:
            updated = update_manifest_name(
                self.manifest_path,
                request.old_name,
                request.new_name,
                dry_run=request.dry_run,
            )
        except (OSError, UnicodeError) as e:
            raise UnexpectedIOFailure(self.manifest_path, e) from e

        if updated:
            self.notifier.success(f"{'Would update' if request.dry_run else 'Updated'}: {manifest_name}")
        else:
            self.notifier.warning(
                f'"name: {request.old_name}" not found in {manifest_name}',
                "The manifest was left unchanged",
            )
        return updated

    def _update_imports(self, request: RenameRequest, summary: RenameSummary) -> None:
        self.notifier.info(f"{'Analyzing' if request.dry_run else 'Updating'} package imports...")

        files = find_source_files(
            self.project_root,
            extension=self.config.source_extension,
            excluded_segments=self.config.excluded_segments,
        )
        for candidate in files:
            count = self._rewrite_file(candidate, request)
            if count == 0:
                continue

            summary.files_changed.append(candidate.relative_path)
            summary.occurrences[candidate.relative_path] = count
            self.notifier.success(
                f"{'Would update' if request.dry_run else 'Updated'}: {candidate.relative_path}"
            )
            if request.verbose:
                self.notifier.info(f'   -> {count} occurrence(s) of "{reference_marker(request.old_name)}"')

        self.notifier.info(
            f"{summary.changed_count} {self.config.source_extension} file(s) "
            f"{'would be updated' if request.dry_run else 'updated'}."
        )

    def _rewrite_file(self, candidate: CandidateFile, request: RenameRequest) -> int:
        """Rewrite one file and return how many references it had."""
        path = candidate.absolute_path
        try:
            content = read_text(path)
            result = rewrite_references(content, request.old_name, request.new_name)
            if result.changed and not request.dry_run:
                write_text(path, result.new_content)
        except (OSError, UnicodeError) as e:
            raise UnexpectedIOFailure(path, e) from e

        if result.changed:
            logger.debug(f"{candidate.relative_path}: {result.occurrence_count} reference(s)")
        return result.occurrence_count

    def _update_platform_ids(self, request: RenameRequest, summary: RenameSummary) -> None:
        self.notifier.info(
            f"{'Analyzing' if request.dry_run else 'Updating'} Android and iOS application identifiers..."
        )
        updaters = (
            (ANDROID_BUILD_GRADLE, update_android_application_id),
            (IOS_PROJECT_FILE, update_ios_bundle_id),
        )
        for relative_path, updater in updaters:
            if updater(self.project_root, request.new_name, dry_run=request.dry_run, notifier=self.notifier):
                summary.platform_files_updated.append(relative_path.as_posix())
                self.notifier.success(
                    f"{'Would update' if request.dry_run else 'Updated'}: {relative_path.as_posix()}"
                )

    async def _update_cache(self, request: RenameRequest, summary: RenameSummary) -> None:
        cache_name = self.config.package_cache_file
        if not self.package_cache_path.is_file():
            logger.debug(f"No {cache_name}, skipping cache update")
            self.notifier.info(f"No {cache_name}, skipping")
            return

        self.notifier.info(f"{'Would update' if request.dry_run else 'Updating'} {cache_name}...")
        summary.cache_updated = update_package_cache(
            self.package_cache_path,
            request.old_name,
            request.new_name,
            root_uri=self.config.root_self_uri,
            dry_run=request.dry_run,
            notifier=self.notifier,
        )
        if not summary.cache_updated:
            return

        self.notifier.success(f"{'Would update' if request.dry_run else 'Updated'}: {cache_name}")
        if request.dry_run or not self.config.refresh.enabled:
            return

        runner = self.refresh_runner or RefreshRunner.from_config(self.project_root, self.config.refresh)
        self.notifier.info(f"Refreshing dependencies with {runner.command}...")
        summary.refresh = await runner.run()
        if not summary.refresh.succeeded:
            self.notifier.warning(
                "Dependency refresh failed",
                f"Run '{runner.command} {' '.join(runner.clean_args)}' and "
                f"'{runner.command} {' '.join(runner.fetch_args)}' manually",
            )


def run_rename(
    project_root: Path,
    request: RenameRequest,
    config: Config | None = None,
    notifier: Notifier | None = None,
) -> RenameSummary:
    """Run a rename synchronously.

    Args:
        project_root: Directory containing the manifest
        request: Old/new names and mode flags
        config: Optional configuration (defaults to the project's config file)
        notifier: Receives progress messages (defaults to the console)

    Returns:
        RenameSummary for the completed transaction
    """
    renamer = ProjectRenamer(project_root, config=config, notifier=notifier)
    return asyncio.run(renamer.rename(request))
