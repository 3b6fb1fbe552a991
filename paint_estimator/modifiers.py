"""
Modifier resolver: turns a base rate into an effective unit rate.

    effective = base × coating × quality × stain

Every factor is an independent multiplier, so the order they are applied in
never changes the result. Resolution order for each factor:
  1. the rate entry's own modifier for that tier
  2. the project-wide default modifier for that tier
  3. 1.0 (no-op)

Nothing here rounds. Rounding to cents happens once, when a line item is built.
"""

from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import CoatingTier, QualityTier, StainTier


DEFAULT_COATING_MODIFIERS = {
    CoatingTier.SPOT_1COAT: 0.5,
    CoatingTier.SPOT_2COATS: 0.75,
    CoatingTier.PRIME_2COATS: 1.0,
}

DEFAULT_QUALITY_MODIFIERS = {
    QualityTier.PRODUCTION: 0.75,
    QualityTier.COMMERCIAL: 1.0,
    QualityTier.RESIDENTIAL: 1.25,
    QualityTier.HIGH_END: 1.5,
}

DEFAULT_STAIN_MODIFIERS = {
    StainTier.STANDARD: 1.3,
    StainTier.CUSTOM: 2.0,
}


class ModifierSet(BaseModel):
    """Project-wide default modifiers for each tier family."""
    model_config = ConfigDict(frozen=True)

    coating: Dict[CoatingTier, float] = Field(default_factory=lambda: dict(DEFAULT_COATING_MODIFIERS))
    quality: Dict[QualityTier, float] = Field(default_factory=lambda: dict(DEFAULT_QUALITY_MODIFIERS))
    stain: Dict[StainTier, float] = Field(default_factory=lambda: dict(DEFAULT_STAIN_MODIFIERS))

    def merged(self, coating=None, quality=None, stain=None) -> "ModifierSet":
        """Return a new set with the given tiers replaced; omitted tiers keep their value."""
        return ModifierSet(
            coating={**self.coating, **(coating or {})},
            quality={**self.quality, **(quality or {})},
            stain={**self.stain, **(stain or {})},
        )


def resolve_modifier(tier, entry_modifiers: Optional[Mapping], default_modifiers: Mapping) -> float:
    """Entry modifier, else project default, else 1.0."""
    if entry_modifiers and tier in entry_modifiers:
        return float(entry_modifiers[tier])
    if tier in default_modifiers:
        return float(default_modifiers[tier])
    return 1.0


def effective_rate(base_rate: float,
                   coating_tier: CoatingTier,
                   quality_tier: QualityTier,
                   stain_tier: Optional[StainTier] = None,
                   entry_coating: Optional[Mapping] = None,
                   entry_quality: Optional[Mapping] = None,
                   defaults: Optional[ModifierSet] = None) -> float:
    """
    Effective unit rate for one rate entry at the requested tiers.

    Args:
        base_rate: rate at the prime+2coats / Commercial reference tier
        coating_tier / quality_tier: requested tiers
        stain_tier: None or StainTier.NONE for painted surfaces
        entry_coating / entry_quality: per-entry modifier overrides
        defaults: project-wide modifiers (built-in defaults when None)

    Returns:
        Unrounded effective rate.
    """
    defaults = defaults or ModifierSet()
    rate = float(base_rate)
    rate *= resolve_modifier(coating_tier, entry_coating, defaults.coating)
    rate *= resolve_modifier(quality_tier, entry_quality, defaults.quality)
    if stain_tier is not None and stain_tier != StainTier.NONE:
        rate *= resolve_modifier(stain_tier, None, defaults.stain)
    return rate
