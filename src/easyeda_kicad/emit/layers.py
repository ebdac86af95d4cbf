"""EasyEDA layer id to KiCad layer name mapping."""

from __future__ import annotations

from easyeda_kicad.models.types import LayerName

LAYER_MAP: dict[str, LayerName] = {
    "1": LayerName.F_CU,           # TopLayer
    "2": LayerName.B_CU,           # BottomLayer
    "3": LayerName.F_SILKSCREEN,   # TopSilkLayer
    "4": LayerName.B_SILKSCREEN,   # BottomSilkLayer
    "5": LayerName.F_PASTE,        # TopPasteMaskLayer
    "6": LayerName.B_PASTE,        # BottomPasteMaskLayer
    "7": LayerName.F_MASK,         # TopSolderMaskLayer
    "8": LayerName.B_MASK,         # BottomSolderMaskLayer
    "9": LayerName.DWGS_USER,      # Ratlines
    "10": LayerName.EDGE_CUTS,     # BoardOutline
    "11": LayerName.EDGE_CUTS,     # Multi-Layer
    "12": LayerName.CMTS_USER,     # Document
    "13": LayerName.F_FAB,         # TopAssembly
    "14": LayerName.B_FAB,         # BottomAssembly
    "15": LayerName.DWGS_USER,     # Mechanical
    "101": LayerName.F_FAB,        # ComponentShapeLayer
}

DEFAULT_LAYER = LayerName.F_FAB

SMD_PAD_LAYERS = (LayerName.F_CU.value, LayerName.F_PASTE.value, LayerName.F_MASK.value)
THT_PAD_LAYERS = ("*.Cu", "*.Mask")


def kicad_layer(layer_id: str) -> str:
    """Map an EasyEDA layer id to a KiCad layer name, defaulting to F.Fab."""
    return LAYER_MAP.get(str(layer_id).strip(), DEFAULT_LAYER).value
