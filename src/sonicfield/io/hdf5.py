"""HDF5 output format for computed SPL fields.

A completed FieldResult is stored with everything needed to reproduce or
re-plot it:

    metadata/     created_at, package version, job generation
    plane/        kind, resolution, listener height; u_coords, v_coords
    fields/       spl, nearest_distance (float32, compressed)
    room/         width, depth, height (attributes)
    deployment/   deployment configuration and source ids (attributes)
    coverage/     CoverageAnalysis metrics (attributes, optional)

NaN marks cells that were not computed (or an empty field).
"""

from dataclasses import asdict, fields
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import h5py
import numpy as np
from numpy.typing import NDArray

from sonicfield import __version__

if TYPE_CHECKING:
    from sonicfield.analysis.coverage import CoverageAnalysis
    from sonicfield.sampling.scheduler import FieldRequest, FieldResult


def _attr_value(value: Any) -> Any:
    """Convert a dataclass field value to something h5py can store."""
    if isinstance(value, Enum):
        return value.value
    return value


class FieldResultWriter:
    """Writer for completed field results.

    Example:
        >>> result = run_to_completion(plane, room, profile, deployment)
        >>> with FieldResultWriter("field.h5") as writer:
        ...     writer.write(result, request=FieldRequest.capture(room, profile, deployment))
    """

    def __init__(
        self,
        filename: str | Path,
        compression: str | None = "gzip",
        compression_level: int = 4,
    ):
        """Initialize HDF5 writer.

        Args:
            filename: Output file path
            compression: Compression algorithm ('gzip', 'lzf', None)
            compression_level: Compression level (0-9 for gzip)
        """
        self.filename = Path(filename)
        self.file = h5py.File(filename, "w")
        self.compression = compression
        self.compression_opts = compression_level if compression == "gzip" else None

    def write(
        self,
        result: "FieldResult",
        request: "FieldRequest | None" = None,
        coverage: "CoverageAnalysis | None" = None,
        **extra_metadata,
    ):
        """Write a field result and close the file.

        Args:
            result: Completed field result
            request: Inputs the field was computed from
            coverage: Coverage metrics to store alongside the field
            **extra_metadata: Additional metadata attributes
        """
        meta = self.file.create_group("metadata")
        meta.attrs["created_at"] = datetime.now(timezone.utc).isoformat()
        meta.attrs["sonicfield_version"] = __version__
        meta.attrs["generation"] = result.generation
        meta.attrs["is_empty"] = result.is_empty
        for key, value in extra_metadata.items():
            meta.attrs[key] = value

        self._write_plane(result)
        self._write_fields(result)

        if request is not None:
            self._write_request(request)

        if coverage is not None:
            cov = self.file.create_group("coverage")
            for key, value in asdict(coverage).items():
                cov.attrs[key] = value

        self.close()

    def _write_plane(self, result: "FieldResult"):
        plane = self.file.create_group("plane")
        plane.attrs["kind"] = result.plane.kind
        plane.attrs["resolution"] = result.plane.resolution
        plane.attrs["listener_height"] = result.plane.listener_height
        plane.attrs["shape"] = list(result.shape)
        plane.create_dataset("u_coords", data=result.u_coords)
        plane.create_dataset("v_coords", data=result.v_coords)

    def _write_fields(self, result: "FieldResult"):
        fields_group = self.file.create_group("fields")
        for name, data, units in (
            ("spl", result.spl, "dB"),
            ("nearest_distance", result.nearest_distance, "m"),
        ):
            dataset = fields_group.create_dataset(
                name,
                data=np.asarray(data, dtype=np.float32),
                compression=self.compression,
                compression_opts=self.compression_opts,
            )
            dataset.attrs["units"] = units

    def _write_request(self, request: "FieldRequest"):
        room = self.file.create_group("room")
        room.attrs["width"] = request.room.width
        room.attrs["depth"] = request.room.depth
        room.attrs["height"] = request.room.height

        deployment = self.file.create_group("deployment")
        for f in fields(request.deployment):
            if f.name == "center_fill":
                continue
            deployment.attrs[f.name] = _attr_value(getattr(request.deployment, f.name))
        for key, value in asdict(request.deployment.center_fill).items():
            if value != "":
                deployment.attrs[f"center_fill_{key}"] = value

        if request.profile is not None:
            deployment.attrs["profile"] = request.profile.id
            deployment.attrs["profile_name"] = request.profile.display_name
        if request.center_fill_profile is not None:
            deployment.attrs["center_fill_profile"] = request.center_fill_profile.id

    def close(self):
        """Flush and close the HDF5 file."""
        if self.file:
            self.file.flush()
            self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class FieldResultReader:
    """Reader for field results written by FieldResultWriter.

    Example:
        >>> with FieldResultReader("field.h5") as reader:
        ...     spl = reader.load_spl()
        ...     coverage = reader.load_coverage()
    """

    def __init__(self, filename: str | Path):
        """Initialize reader.

        Args:
            filename: Path to HDF5 field file
        """
        self.filename = Path(filename)
        self.file = h5py.File(filename, "r")

    def get_metadata(self) -> dict[str, Any]:
        """Extract all stored metadata.

        Returns:
            Dict with metadata, plane, room and deployment attributes
        """
        metadata = {}
        for group in ("metadata", "room", "deployment"):
            if group in self.file:
                metadata[group] = dict(self.file[group].attrs)

        if "plane" in self.file:
            plane = dict(self.file["plane"].attrs)
            plane["u_coords"] = self.file["plane/u_coords"][:]
            plane["v_coords"] = self.file["plane/v_coords"][:]
            metadata["plane"] = plane

        return metadata

    def load_spl(self) -> NDArray[np.floating]:
        """Load the SPL field (dB), shape (rows, cols)."""
        if "fields/spl" not in self.file:
            raise ValueError("No SPL field data in file")
        return self.file["fields/spl"][:]

    def load_nearest_distance(self) -> NDArray[np.floating]:
        """Load the nearest-source distance field (meters)."""
        if "fields/nearest_distance" not in self.file:
            raise ValueError("No distance field data in file")
        return self.file["fields/nearest_distance"][:]

    def load_coverage(self) -> dict[str, Any] | None:
        """Load stored coverage metrics, or None if the file has none."""
        if "coverage" not in self.file:
            return None
        return dict(self.file["coverage"].attrs)

    def close(self):
        """Close the HDF5 file."""
        if self.file:
            self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
