# isapi_deploy/checkers/pe_header.py
"""Built-in PE/COFF header checker"""

import struct
from pathlib import Path
from typing import Optional, Tuple

from .base import DependencyChecker
from ..constants import PE_MACHINE_TYPES, PE_CHARACTERISTIC_DLL
from ..models.result import ValidationResult

DOS_SIGNATURE = b"MZ"
PE_SIGNATURE = b"PE\0\0"
E_LFANEW_OFFSET = 0x3C
COFF_HEADER = struct.Struct("<HHIIIHH")
OPTIONAL_MAGIC = {0x10B: "PE32", 0x20B: "PE32+"}
PE32_PLUS_ARCHITECTURES = ("x64", "arm64")


class PeHeaderChecker(DependencyChecker):
    """Reads machine type and image characteristics straight from the file header"""

    name = "pe-header"

    def check(self, path: Path) -> ValidationResult:
        result = ValidationResult(checker=self.name)

        try:
            header = self._read_header(path)
        except OSError as e:
            result.add_failure(f"Cannot read {path.name}: {e}")
            return result

        if header is None:
            result.add_failure(f"{path.name} is not a Windows PE image")
            return result

        machine, characteristics, magic = header
        architecture = PE_MACHINE_TYPES.get(machine)

        if architecture is None:
            result.add_failure(f"Unknown machine type 0x{machine:04X}")
        elif architecture != self.architecture:
            result.add_failure(
                f"Architecture is {architecture}, expected {self.architecture}"
            )
        else:
            result.add_message(f"Architecture: {architecture}")

        format_name = OPTIONAL_MAGIC.get(magic)
        if format_name is None:
            result.add_failure(f"Unknown optional header magic 0x{magic:04X}")
        elif architecture in PE32_PLUS_ARCHITECTURES and format_name != "PE32+":
            result.add_failure(f"{architecture} image uses {format_name} optional header")
        else:
            result.add_message(f"Format: {format_name}")

        if characteristics & PE_CHARACTERISTIC_DLL:
            result.add_message("Image type: DLL")
        else:
            result.add_failure("Image is not a DLL; ISAPI filters must be DLLs")

        return result

    @staticmethod
    def _read_header(path: Path) -> Optional[Tuple[int, int, int]]:
        """Return (machine, characteristics, optional magic) or None"""
        with open(path, "rb") as f:
            if f.read(2) != DOS_SIGNATURE:
                return None

            f.seek(E_LFANEW_OFFSET)
            raw = f.read(4)
            if len(raw) != 4:
                return None
            (pe_offset,) = struct.unpack("<I", raw)

            f.seek(pe_offset)
            if f.read(4) != PE_SIGNATURE:
                return None

            raw = f.read(COFF_HEADER.size)
            if len(raw) != COFF_HEADER.size:
                return None
            machine, _, _, _, _, optional_size, characteristics = COFF_HEADER.unpack(raw)

            magic = 0
            if optional_size >= 2:
                raw = f.read(2)
                if len(raw) == 2:
                    (magic,) = struct.unpack("<H", raw)

        return machine, characteristics, magic
