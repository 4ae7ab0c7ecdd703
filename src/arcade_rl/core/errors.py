# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exception types shared by environments, agents and model I/O."""


class ArcadeError(RuntimeError):
    """Base class for errors raised by arcade_rl."""


class ModelLoadError(ArcadeError):
    """An agent could not be built from a named-tensor mapping or file."""


class MissingTensorError(ModelLoadError, KeyError):
    """A required tensor key is absent from the loaded mapping."""

    def __init__(self, key: str):
        super().__init__(f"Missing tensor key '{key}' in model file")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class ModelFormatError(ModelLoadError):
    """The loaded tensors do not describe a valid model (count, shape, chain)."""


class PolicyError(ArcadeError):
    """The agent failed to compute an action for the current state."""
