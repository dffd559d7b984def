"""CHIP-8 interpreter variants and the quirks each one selects."""

import enum


class Variant(enum.IntEnum):
    """Instruction-set dialect emulated by a session.

    The variant is fixed for the lifetime of a state and is stored as a static
    (non-pytree) field, so quirk checks below are plain Python branches that are
    resolved at trace time.
    """
    CHIP8 = 0
    SCHIP1_0 = 1
    SCHIP1_1 = 2
    XOCHIP = 3

    @classmethod
    def from_name(cls, name: str) -> "Variant":
        """Look up a variant by name, ignoring case and separators."""
        key = name.upper().replace("-", "").replace(".", "_").replace(" ", "")
        aliases = {"SCHIP": "SCHIP1_1", "SCHIP10": "SCHIP1_0", "SCHIP11": "SCHIP1_1", "XO_CHIP": "XOCHIP"}
        key = aliases.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Unknown variant '{name}'. Available: {[v.name for v in cls]}"
            ) from None

    @property
    def has_superchip_ops(self) -> bool:
        """Scrolling, hi-res mode, big sprites and the large font."""
        return self is not Variant.CHIP8

    @property
    def has_user_flags(self) -> bool:
        """FX75/FX85 save and restore registers to the flag file."""
        return self is Variant.XOCHIP

    @property
    def logic_resets_vf(self) -> bool:
        """8XY1/8XY2/8XY3 clear VF afterwards."""
        return self is Variant.CHIP8

    @property
    def shift_reads_vy(self) -> bool:
        """8XY6/8XYE shift VY into VX instead of shifting VX in place."""
        return self is Variant.CHIP8

    @property
    def jump_uses_vx(self) -> bool:
        """BNNN adds VX (X = high nibble of NNN) instead of V0."""
        return self in (Variant.SCHIP1_0, Variant.SCHIP1_1)

    @property
    def load_store_increments_i(self) -> bool:
        """FX55/FX65 leave I pointing past the last register."""
        return self is Variant.CHIP8

    @property
    def clips_sprites(self) -> bool:
        """Sprites are cut at the screen edge instead of wrapping around."""
        return self in (Variant.CHIP8, Variant.SCHIP1_0)

    @property
    def waits_for_vblank(self) -> bool:
        """A draw ends the current frame."""
        return self in (Variant.CHIP8, Variant.SCHIP1_0)

    @property
    def mode_switch_clears_display(self) -> bool:
        return self is Variant.XOCHIP
