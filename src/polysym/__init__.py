"""polysym — point groups of planar maps given as rotation systems.

Public API is organised into layers:

- **Core** — limits, run context, dart maps
- **Symmetry** — certificates, automorphisms, classification
- **Reporting** — per-map reports and group names
- **Input / output** — code conversion, planar_code and JSON streams
- **Building** — rotation systems of standard solids
"""

# ── Core ────────────────────────────────────────────────────────────
from .config import MapLimits, DEFAULT_LIMITS, SMALL_LIMITS, LARGE_LIMITS
from .context import DartArena, SymmetryContext
from .darts import RotationMap, build_map
from .errors import MalformedMapError, SymmetryInconsistencyError

# ── Symmetry ────────────────────────────────────────────────────────
from .certificate import END_OF_VERTEX, build_certificate, bfs_labelling
from .automorphisms import Automorphism, AutomorphismGroup, determine_automorphisms
from .classify import (
    AxisCenter,
    classify,
    classify_axial,
    classify_polyhedral,
    rotation_fold_at_vertex,
    rotation_fold_at_face,
    has_rotation_at_edge,
)

# ── Reporting ───────────────────────────────────────────────────────
from .groups import (
    FAMILIES,
    AXIAL_FAMILIES,
    POLYHEDRAL_FAMILIES,
    PointGroup,
    GroupPattern,
    parse_group_pattern,
)
from .reporting import MapReport, analyse_code, analyse_codes, summarize, summary_lines

# ── Input / output ──────────────────────────────────────────────────
from .codes import code_from_rotation, rotation_from_code
from .io import (
    read_planar_code,
    write_planar_code,
    load_json,
    save_json,
    load_codes,
    save_codes,
)

# ── Building ────────────────────────────────────────────────────────
from .builders import (
    SOLIDS,
    code_from_faces,
    pyramid_code,
    prism_code,
    twisted_prism_code,
    antiprism_code,
    tetrahedron_code,
    cube_code,
    octahedron_code,
    icosahedron_code,
    dodecahedron_code,
    coned_twisted_prism_code,
    flagged_prism_code,
    flagged_antiprism_code,
    pyritohedral_cube_code,
    tetrahedral_cube_code,
    pinwheel_code,
)

__all__ = [
    # Core
    "MapLimits",
    "DEFAULT_LIMITS",
    "SMALL_LIMITS",
    "LARGE_LIMITS",
    "DartArena",
    "SymmetryContext",
    "RotationMap",
    "build_map",
    "MalformedMapError",
    "SymmetryInconsistencyError",
    # Symmetry
    "END_OF_VERTEX",
    "build_certificate",
    "bfs_labelling",
    "Automorphism",
    "AutomorphismGroup",
    "determine_automorphisms",
    "AxisCenter",
    "classify",
    "classify_axial",
    "classify_polyhedral",
    "rotation_fold_at_vertex",
    "rotation_fold_at_face",
    "has_rotation_at_edge",
    # Reporting
    "FAMILIES",
    "AXIAL_FAMILIES",
    "POLYHEDRAL_FAMILIES",
    "PointGroup",
    "GroupPattern",
    "parse_group_pattern",
    "MapReport",
    "analyse_code",
    "analyse_codes",
    "summarize",
    "summary_lines",
    # Input / output
    "code_from_rotation",
    "rotation_from_code",
    "read_planar_code",
    "write_planar_code",
    "load_json",
    "save_json",
    "load_codes",
    "save_codes",
    # Building
    "SOLIDS",
    "code_from_faces",
    "pyramid_code",
    "prism_code",
    "twisted_prism_code",
    "antiprism_code",
    "tetrahedron_code",
    "cube_code",
    "octahedron_code",
    "icosahedron_code",
    "dodecahedron_code",
    "coned_twisted_prism_code",
    "flagged_prism_code",
    "flagged_antiprism_code",
    "pyritohedral_cube_code",
    "tetrahedral_cube_code",
    "pinwheel_code",
]
