# -*- coding: utf-8 -*-
"""
semodel-converter - Structure Checker
XModel binary (.xmodel_bin) structure verification
- Container check (magic, stored size, LZ4 block)
- Chunk walk with the shared ChunkTag table
- Section order and count consistency (declared counts vs. records present)
"""

from collections import Counter
from typing import Dict, List
import os

from ..core.errors import ConversionError
from ..core.io.chunk_schema import ChunkTag
from ..core.io.chunk_writer import iter_chunks
from ..core.io.lz4_container import read_container

# Section markers in the order the writer emits them
EXPECTED_ORDER = [
    ChunkTag.MODEL,
    ChunkTag.VERSION,
    ChunkTag.BONE_COUNT,
    ChunkTag.VERTEX_COUNT,
    ChunkTag.FACE_COUNT,
    ChunkTag.OBJECT_COUNT,
    ChunkTag.MATERIAL_COUNT,
]


class StructureChecker:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def check_bytes(self, data: bytes, filepath: str = "") -> Dict:
        report = {
            "filepath": filepath,
            "uncompressed_size": 0,
            "comments": [],
            "version": None,
            "counts": {},
            "chunks": Counter(),
            "errors": [],
            "warnings": [],
        }

        try:
            payload = read_container(data)
            report["uncompressed_size"] = len(payload)
            chunks = list(iter_chunks(payload))
        except ConversionError as e:
            report["errors"].append(str(e))
            return report

        declared: Dict[ChunkTag, int] = {}
        for chunk in chunks:
            report["chunks"][chunk.tag.name] += 1
            if chunk.tag is ChunkTag.COMMENT:
                report["comments"].append(chunk.strings[0])
            elif chunk.tag is ChunkTag.VERSION:
                report["version"] = chunk.values[0]
            elif chunk.tag in EXPECTED_ORDER and chunk.tag.payload_struct.size:
                declared[chunk.tag] = chunk.values[0]

        # order
        markers = [c.tag for c in chunks if c.tag in EXPECTED_ORDER]
        if markers != EXPECTED_ORDER:
            report["errors"].append(
                "Section order mismatch: " + ", ".join(t.name for t in markers)
            )

        # declared counts vs. records
        counted = report["chunks"]
        faces = declared.get(ChunkTag.FACE_COUNT, 0)
        verts = declared.get(ChunkTag.VERTEX_COUNT, 0)
        expectations = [
            ("bones", declared.get(ChunkTag.BONE_COUNT), counted[ChunkTag.BONE_INFO.name]),
            ("bone transforms", declared.get(ChunkTag.BONE_COUNT), counted[ChunkTag.BONE_INDEX.name]),
            ("vertices + face corners", verts + 3 * faces, counted[ChunkTag.VERTEX_INDEX.name]),
            ("faces", faces, counted[ChunkTag.FACE_INFO.name]),
            ("objects", declared.get(ChunkTag.OBJECT_COUNT), counted[ChunkTag.OBJECT_INFO.name]),
            ("materials", declared.get(ChunkTag.MATERIAL_COUNT), counted[ChunkTag.MATERIAL_INFO.name]),
        ]
        for label, expected, actual in expectations:
            if expected is not None and expected != actual:
                report["errors"].append(f"{label}: declared {expected}, found {actual}")

        declared_weights = sum(c.values[0] for c in chunks if c.tag is ChunkTag.WEIGHT_COUNT)
        if declared_weights != counted[ChunkTag.WEIGHT.name]:
            report["errors"].append(
                f"weights: declared {declared_weights}, found {counted[ChunkTag.WEIGHT.name]}"
            )
        if any(c.tag is ChunkTag.WEIGHT and c.values[1] == 0.0 for c in chunks):
            report["warnings"].append("zero weight written")

        report["counts"] = {
            "bones": declared.get(ChunkTag.BONE_COUNT, 0),
            "vertices": verts,
            "faces": faces,
            "objects": declared.get(ChunkTag.OBJECT_COUNT, 0),
            "materials": declared.get(ChunkTag.MATERIAL_COUNT, 0),
        }
        return report

    def check_xmodel_bin_file(self, filepath: str) -> Dict:
        if not os.path.exists(filepath):
            return {"filepath": filepath, "errors": [f"File not found: {filepath}"], "warnings": []}
        with open(filepath, "rb") as f:
            return self.check_bytes(f.read(), filepath)

    def format_report(self, report: Dict) -> List[str]:
        lines = [f"File: {report['filepath']}"]
        if report.get("version") is not None:
            lines.append(f"Version: {report['version']}")
        if report.get("uncompressed_size"):
            lines.append(f"Uncompressed size: {report['uncompressed_size']}")
        for comment in report.get("comments", []):
            lines.append(f"// {comment}")
        for key, value in report.get("counts", {}).items():
            lines.append(f"{key}: {value}")
        if self.verbose:
            for name, count in sorted(report.get("chunks", {}).items()):
                lines.append(f"  {name}: {count}")
        for err in report["errors"]:
            lines.append(f"ERROR: {err}")
        for warn in report["warnings"]:
            lines.append(f"WARNING: {warn}")
        return lines
