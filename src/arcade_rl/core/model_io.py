# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Named-tensor persistence for agent parameters.

Models are stored as a flat ``{name: tensor}`` mapping in a single
safetensors file. Network layers follow the key schema returned by
:func:`layer_keys`.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Tuple, Union

import torch
from safetensors import SafetensorError
from safetensors.torch import load_file, save_file

from .errors import MissingTensorError, ModelFormatError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def select_device(preference: Optional[str] = None) -> torch.device:
    """
    Pick the device tensors are loaded on.

    ``None`` or ``"auto"`` selects the first CUDA device when one is available
    and falls back to the CPU otherwise.
    """
    if preference is None or preference == "auto":
        try:
            if torch.cuda.is_available():
                return torch.device("cuda", 0)
        except RuntimeError as exc:
            logger.warning("CUDA probe failed, using CPU: %s", exc)
        return torch.device("cpu")
    return torch.device(preference)


def layer_keys(index: int) -> Tuple[str, str]:
    """Storage keys of the (weight, bias) pair of layer ``index``."""
    return f"{index}.weight", f"{index}.bias"


def save_named_tensors(tensors: Dict[str, torch.Tensor], path: PathLike) -> None:
    """Write a flat name -> tensor mapping to ``path``."""
    payload = {name: t.detach().to("cpu").contiguous() for name, t in tensors.items()}
    save_file(payload, os.fspath(path))
    logger.info("Saved %d tensors to %s", len(payload), path)


def load_named_tensors(
    path: PathLike, device: Optional[torch.device] = None
) -> Dict[str, torch.Tensor]:
    """
    Read a flat name -> tensor mapping from ``path``.

    Raises:
        ModelFormatError: If the file is missing or is not a safetensors file.
    """
    device = device if device is not None else select_device()
    try:
        tensors = load_file(os.fspath(path), device=str(device))
    except (OSError, SafetensorError) as exc:
        raise ModelFormatError(f"Cannot read named tensors from {path}: {exc}") from exc
    logger.info("Loaded %d tensors from %s on %s", len(tensors), path, device)
    return tensors


def pop_required(tensors: Dict[str, torch.Tensor], key: str) -> torch.Tensor:
    """Remove and return ``tensors[key]``, raising MissingTensorError if absent."""
    try:
        return tensors.pop(key)
    except KeyError:
        raise MissingTensorError(key) from None


def split_layers(tensors: Dict[str, torch.Tensor]) -> List[Tuple[torch.Tensor, torch.Tensor]]:
    """
    Group a network mapping into ordered (weight, bias) pairs.

    Keys are sorted before anything else so the result never depends on the
    iteration order of the mapping. The key count must be even and every
    layer index below ``count / 2`` must provide both keys of
    :func:`layer_keys`.
    """
    keys = sorted(tensors)
    if len(keys) % 2 != 0:
        raise ModelFormatError(
            f"Expected an even number of tensors (weight/bias pairs), got {len(keys)}: {keys}"
        )
    if not keys:
        raise ModelFormatError("Model file contains no layers")

    remaining = dict(tensors)
    layers = []
    for index in range(len(keys) // 2):
        weight_key, bias_key = layer_keys(index)
        weight = pop_required(remaining, weight_key)
        bias = pop_required(remaining, bias_key)
        layers.append((weight, bias))
    return layers
