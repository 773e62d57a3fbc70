"""Optional rewrite of the Android and iOS application identifiers."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from change_project_name.utils.files import read_text, write_text

if TYPE_CHECKING:
    from change_project_name.notifications.base import Notifier

logger = logging.getLogger(__name__)

ANDROID_BUILD_GRADLE = Path("android/app/build.gradle")
IOS_PROJECT_FILE = Path("ios/Runner.xcodeproj/project.pbxproj")
IDENTIFIER_PREFIX = "com.example"

APPLICATION_ID_PATTERN = re.compile(r'applicationId\s+"[^"]*"')
BUNDLE_ID_PATTERN = re.compile(r"PRODUCT_BUNDLE_IDENTIFIER = [^;]*;")


def _rewrite(
    path: Path,
    pattern: re.Pattern[str],
    replacement: str,
    dry_run: bool,
    notifier: Notifier | None,
) -> bool:
    if not path.is_file():
        return False

    try:
        content = read_text(path)
        updated = pattern.sub(lambda _: replacement, content)
        if updated == content:
            return False
        if not dry_run:
            write_text(path, updated)
    except OSError as e:
        logger.warning(f"Could not update {path}: {e}")
        if notifier is not None:
            notifier.warning(f"Could not update {path.name}", str(e))
        return False

    return True


def update_android_application_id(
    project_root: Path,
    new_name: str,
    dry_run: bool = False,
    notifier: Notifier | None = None,
) -> bool:
    """Set ``applicationId "com.example.<new_name>"`` in the app build.gradle."""
    return _rewrite(
        project_root / ANDROID_BUILD_GRADLE,
        APPLICATION_ID_PATTERN,
        f'applicationId "{IDENTIFIER_PREFIX}.{new_name}"',
        dry_run,
        notifier,
    )


def update_ios_bundle_id(
    project_root: Path,
    new_name: str,
    dry_run: bool = False,
    notifier: Notifier | None = None,
) -> bool:
    """Set every ``PRODUCT_BUNDLE_IDENTIFIER`` in the Runner project to ``com.example.<new_name>``."""
    return _rewrite(
        project_root / IOS_PROJECT_FILE,
        BUNDLE_ID_PATTERN,
        f"PRODUCT_BUNDLE_IDENTIFIER = {IDENTIFIER_PREFIX}.{new_name};",
        dry_run,
        notifier,
    )
