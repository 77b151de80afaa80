# isapi_deploy/core/package_assembler.py
"""Staging directory and zip package assembly"""

import html
import logging
import shutil
import tempfile
import zipfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from ..api.exceptions import PackagingError
from ..constants import (
    ARCHIVE_FILE_PATTERN,
    LANDING_PAGE_NAME,
    SITE_DIR_NAME,
    STAGING_PREFIX,
)
from ..models.config import PackageSettings
from ..models.request import DeploymentRequest
from ..models.result import StagingPackage
from ..templates import load_template
from ..utils.file_utils import calculate_file_checksum, format_size
from ..utils.template_utils import render_template, replace_placeholder

logger = logging.getLogger(__name__)


@contextmanager
def staging_directory(parent: Optional[Path] = None) -> Iterator[Path]:
    """Create a fresh staging directory and remove it on every exit path

    Args:
        parent: Directory to create the staging area in (system temp by default)

    Yields:
        Path to the staging directory
    """
    path = Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=parent))
    logger.debug("Created staging directory %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Could not fully remove staging directory %s", path)
        else:
            logger.debug("Removed staging directory %s", path)


class PackageAssembler:
    """Build the site layout and compress it into one zip archive

    Layout inside the archive::

        bin/<artifact>
        web.config
        index.html
    """

    def __init__(self, settings: Optional[PackageSettings] = None):
        self.settings = settings or PackageSettings()

    def render_config(self, template_text: str, binary_name: str) -> str:
        """Substitute the artifact name for every placeholder occurrence"""
        placeholder = self.settings.placeholder
        count = template_text.count(placeholder)

        if count == 0:
            logger.warning(
                "Configuration template does not contain placeholder '%s'; "
                "it will not reference %s", placeholder, binary_name
            )
        else:
            logger.debug("Replacing %d occurrence(s) of %s with %s", count, placeholder, binary_name)

        return replace_placeholder(template_text, placeholder, binary_name)

    def render_landing_page(self, request: DeploymentRequest, timestamp: Optional[datetime] = None) -> str:
        """Render the static landing document"""
        timestamp = timestamp or datetime.now(timezone.utc)
        template = load_template("landing", LANDING_PAGE_NAME)
        return render_template(template, {
            "artifact_name": html.escape(request.artifact_name),
            "resource_group": html.escape(request.resource_group),
            "target_name": html.escape(request.target_name),
            "deployed_at": timestamp.strftime("%Y-%m-%d %H:%M:%S UTC"),
        })

    def assemble(self, request: DeploymentRequest, staging_root: Path) -> StagingPackage:
        """
        Assemble the deployment package

        Args:
            request: Deployment request with a validated artifact
            staging_root: Empty staging directory owned by this run

        Returns:
            StagingPackage

        Raises:
            PackagingError: On any copy, write or compress failure
        """
        site_dir = staging_root / SITE_DIR_NAME
        binary_name = request.artifact_name

        try:
            bin_dir = site_dir / self.settings.binary_dir
            bin_dir.mkdir(parents=True)
            shutil.copy2(request.artifact_path, bin_dir / binary_name)

            template_text = request.config_template_path.read_text(encoding="utf-8")
            config_path = site_dir / self.settings.config_name
            config_path.write_text(self.render_config(template_text, binary_name), encoding="utf-8")

            landing_path = None
            if self.settings.landing_page:
                landing_path = site_dir / LANDING_PAGE_NAME
                landing_path.write_text(self.render_landing_page(request), encoding="utf-8")

            archive_path = staging_root / ARCHIVE_FILE_PATTERN.format(target=request.target_name)
            self._compress(site_dir, archive_path)

        except (OSError, UnicodeDecodeError, zipfile.BadZipFile) as e:
            raise PackagingError(f"Failed to assemble package: {e}")

        package = StagingPackage(
            directory_path=staging_root,
            binary_file_name=binary_name,
            rendered_config_path=config_path,
            archive_path=archive_path,
            landing_page_path=landing_path,
        )

        logger.info(
            "Package %s created (%s, sha256 %s)",
            archive_path.name,
            format_size(package.archive_size or 0),
            calculate_file_checksum(archive_path)
        )
        return package

    @staticmethod
    def _compress(source_dir: Path, archive_path: Path) -> None:
        """Zip a directory with entries relative to its root"""
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path in sorted(source_dir.rglob("*")):
                if path.is_file():
                    archive.write(path, path.relative_to(source_dir).as_posix())
