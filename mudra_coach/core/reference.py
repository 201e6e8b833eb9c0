"""
reference poses (target mudras) and the json library they live in.

file format (one file per pose, <name>.json with spaces as underscores):
  {"name": "pataka", "landmarks": [{"x": 0.0, "y": 0.0, "z": 0.0}, ...]}
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import numpy as np

from .landmarks import Landmark3D, as_landmark_array, to_landmark_tuple


def check_name(name: str) -> str:
    """strip a pose name and reject anything that isn't a plain file name."""
    name = (name or "").strip()
    if not name:
        raise ValueError("reference pose name must not be empty")
    if "/" in name or "\\" in name or ".." in name:
        raise ValueError(f"reference pose name must not contain path separators or '..': {name!r}")
    return name


def file_stem(name: str) -> str:
    """file name (without .json) for a pose name. spaces become underscores."""
    return check_name(name).replace(" ", "_")


@dataclass(frozen=True)
class ReferencePose:
    """named target pose. immutable once created."""

    name: str
    landmarks: Tuple[Landmark3D, ...]

    @classmethod
    def from_landmarks(cls, name: str, landmarks) -> "ReferencePose":
        """capture a live landmark sequence under a user-supplied name."""
        return cls(name=check_name(name), landmarks=to_landmark_tuple(landmarks))

    @classmethod
    def from_dict(cls, data: dict) -> "ReferencePose":
        if not isinstance(data, dict) or "name" not in data or "landmarks" not in data:
            raise ValueError("reference pose needs 'name' and 'landmarks' keys")
        return cls.from_landmarks(data["name"], data["landmarks"])

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "landmarks": [lm.to_dict() for lm in self.landmarks],
        }

    def as_array(self) -> np.ndarray:
        return as_landmark_array(self.landmarks)

    def __len__(self) -> int:
        return len(self.landmarks)


class ReferenceLibrary:
    """
    directory of saved reference poses.

    handles:
      - save / load by name
      - listing available poses (sorted)
      - deleting poses
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{file_stem(name)}.json"

    def save(self, pose: ReferencePose) -> Path:
        """write pose to <directory>/<name>.json, spaces as underscores (overwrites)."""
        path = self.path_for(pose.name)
        with open(path, "w") as f:
            json.dump(pose.to_dict(), f, indent=2)
        print(f"[info] saved reference '{pose.name}' ({len(pose)} landmarks) -> {path}")
        return path

    def load(self, name: str) -> ReferencePose:
        path = self.path_for(name)
        if not path.exists():
            raise FileNotFoundError(f"no reference pose named '{name}' in {self.directory}")
        return self.load_path(path)

    def load_path(self, path) -> ReferencePose:
        """load a pose from any json file with the reference format."""
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = json.load(f)
            pose = ReferencePose.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"invalid reference pose file {path}: {e}") from e

        print(f"[info] loaded reference: {pose.name}")
        return pose

    def list_names(self) -> List[str]:
        return sorted(p.stem for p in self.directory.glob("*.json"))

    def delete(self, name: str) -> bool:
        """remove a saved pose. returns False if it didn't exist."""
        path = self.path_for(name)
        if not path.exists():
            print(f"[warn] cannot delete '{name}': not found")
            return False
        path.unlink()
        print(f"[info] deleted reference: {name}")
        return True
