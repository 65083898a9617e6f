"""
Parameter record and exported-config schemas

Parameters are stored under Python names (kernel_mu) and serialized under
the interchange names (kernelMu) so configs exported by an engine can be
shared with any consumer that reads the same JSON shape. Only types are
validated: out-of-range values are accepted as-is.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError


KERNEL_KEYS = ("R", "kernel_mu", "kernel_sigma")
GROWTH_KEYS = ("mu", "sigma")


class LeniaParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    R: float = Field(default=8, description="Kernel radius in cells")
    mu: float = Field(default=0.2, description="Growth function center")
    sigma: float = Field(default=0.1, description="Growth function width")
    dt: float = Field(default=0.05, description="Euler time step")
    kernel_mu: float = Field(default=0.5, alias="kernelMu",
                             description="Radial position of the kernel ring [0-1]")
    kernel_sigma: float = Field(default=0.2, alias="kernelSigma",
                                description="Width of the kernel ring")

    def merged(self, updates):
        """New record with updates applied (field names or aliases). None values are skipped."""
        updates = {k: v for k, v in canonical_keys(updates).items() if v is not None}
        return LeniaParams.model_validate({**self.model_dump(), **updates})

    def changed_keys(self, other):
        return {name for name in type(self).model_fields
                if getattr(self, name) != getattr(other, name)}

    def export(self):
        return self.model_dump(by_alias=True)


def canonical_keys(updates):
    """Map interchange names (kernelMu) to field names (kernel_mu)."""
    aliases = {field.alias: name for name, field in LeniaParams.model_fields.items()
               if field.alias}
    return {aliases.get(key, key): value for key, value in updates.items()}


def invalidated(old, new):
    """Which caches a parameter change invalidates.

    Returns a (rebuild_kernel, rebuild_growth) pair of booleans.
    """
    changed = old.changed_keys(new)
    return (any(k in changed for k in KERNEL_KEYS),
            any(k in changed for k in GROWTH_KEYS))


class LeniaConfig(BaseModel):
    """Exported single-channel engine config."""
    size: int
    params: LeniaParams
    state: List[float]
    stats: Dict[str, float] = Field(default_factory=dict)


class MultiChannelConfig(BaseModel):
    """Exported three-channel engine config."""
    model_config = ConfigDict(populate_by_name=True)

    size: int
    channel_params: List[LeniaParams] = Field(alias="channelParams")
    states: List[List[float]]
    stats: Dict[str, float] = Field(default_factory=dict)


def validate_config(config):
    """Check a single-channel config dict without building an engine.

    Returns (valid, errors) where errors is a list of readable messages.
    """
    errors = []
    params = config.get("params")
    if params is None:
        errors.append("Missing params")
    else:
        for key in ("R", "mu", "sigma"):
            value = params.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"Invalid {key}")
        if not errors:
            try:
                LeniaParams.model_validate(params)
            except ValidationError as e:
                errors.extend(
                    f"Invalid {'.'.join(str(p) for p in err['loc'])}" for err in e.errors())

    state = config.get("state")
    if state is not None:
        if not isinstance(state, (list, tuple)):
            errors.append("State must be an array")
        else:
            size = config.get("size")
            expected = size * size if isinstance(size, int) else None
            if expected is None:
                errors.append("Missing size")
            elif len(state) != expected:
                errors.append(
                    f"State size mismatch: expected {expected}, got {len(state)}")

    return len(errors) == 0, errors
