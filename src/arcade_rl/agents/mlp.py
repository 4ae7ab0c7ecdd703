# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Feed-forward network agent.

The network maps an environment feature vector to one score per action.
Every layer but the last is followed by a ReLU. The action is the argmax of
the softmax of the output: index 0 is LEFT, the last index is RIGHT and any
other index is DO_NOTHING.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import torch
import torch.nn as nn

from arcade_rl.core.agent import Agent
from arcade_rl.core.errors import ModelFormatError, PolicyError
from arcade_rl.core.mdp import Action, MarkovDecisionProcess
from arcade_rl.core.model_io import PathLike, layer_keys, save_named_tensors, split_layers

logger = logging.getLogger(__name__)


def action_from_index(index: int, output_size: int) -> Action:
    """Map an output index to an action: first -> LEFT, last -> RIGHT."""
    if index == 0:
        return Action.LEFT
    elif index == output_size - 1:
        return Action.RIGHT
    return Action.DO_NOTHING


class MultiLayerPerceptron(nn.Module, Agent):
    """
    Multi-layer perceptron agent.

    Args:
        input_size: Width of the feature vector.
        output_size: Number of scores produced (3 for action selection).
        hidden_sizes: Widths of the internal layers, in order.

    Example:
        >>> net = MultiLayerPerceptron(2, 3, [4, 8, 4])
        >>> net.save("mlp.safetensors")
        >>> same = MultiLayerPerceptron.from_file("mlp.safetensors")
    """

    def __init__(self, input_size: int, output_size: int, hidden_sizes: Sequence[int] = ()):
        super().__init__()
        sizes = [input_size, *hidden_sizes, output_size]
        if any(size <= 0 for size in sizes):
            raise ValueError(f"Layer sizes must be positive, got {sizes}")
        self.layers = nn.ModuleList(
            nn.Linear(n_in, n_out) for n_in, n_out in zip(sizes[:-1], sizes[1:])
        )
        self._freeze()

    @classmethod
    def from_layers(cls, layers: Sequence[Tuple[torch.Tensor, torch.Tensor]]) -> "MultiLayerPerceptron":
        """
        Build a network from explicit (weight, bias) pairs.

        Weights have shape (out, in) and biases shape (out,).

        Raises:
            ModelFormatError: If a shape is malformed or the output width of a
                layer differs from the input width of the next one.
        """
        if not layers:
            raise ModelFormatError("A network needs at least one layer")

        for index, (weight, bias) in enumerate(layers):
            if weight.dim() != 2 or bias.dim() != 1 or bias.shape[0] != weight.shape[0]:
                raise ModelFormatError(
                    f"Layer {index}: weight {tuple(weight.shape)} and bias {tuple(bias.shape)} do not match"
                )
        for index, ((w_prev, _), (w_next, _)) in enumerate(zip(layers[:-1], layers[1:])):
            if w_prev.shape[0] != w_next.shape[1]:
                raise ModelFormatError(
                    f"Layer {index} outputs {w_prev.shape[0]} values but layer {index + 1} expects {w_next.shape[1]}"
                )

        sizes = [layers[0][0].shape[1]] + [weight.shape[0] for weight, _ in layers]
        net = cls(sizes[0], sizes[-1], sizes[1:-1])
        with torch.no_grad():
            for linear, (weight, bias) in zip(net.layers, layers):
                linear.weight.copy_(weight)
                linear.bias.copy_(bias)
        return net.to(layers[0][0].device)

    @classmethod
    def from_tensors(cls, tensors: Dict[str, torch.Tensor]) -> "MultiLayerPerceptron":
        return cls.from_layers(split_layers(tensors))

    def _freeze(self) -> None:
        for parameter in self.parameters():
            parameter.requires_grad_(False)
        self.eval()

    @property
    def input_size(self) -> int:
        return self.layers[0].in_features

    @property
    def output_size(self) -> int:
        return self.layers[-1].out_features

    @property
    def device(self) -> torch.device:
        return self.layers[0].weight.device

    def forward(self, xs: torch.Tensor) -> torch.Tensor:
        *hidden, last = self.layers
        for layer in hidden:
            xs = torch.relu(layer(xs))
        return last(xs)

    def policy(self, env: MarkovDecisionProcess) -> Action:
        try:
            with torch.no_grad():
                logits = self(env.feature().to(self.device))
                probs = torch.softmax(logits, dim=-1)
                index = int(torch.argmax(probs, dim=-1).item())
        except (RuntimeError, ValueError) as exc:
            raise PolicyError(f"Forward pass failed: {exc}") from exc
        return action_from_index(index, self.output_size)

    def to_tensors(self) -> Dict[str, torch.Tensor]:
        tensors = {}
        for index, layer in enumerate(self.layers):
            weight_key, bias_key = layer_keys(index)
            tensors[weight_key] = layer.weight
            tensors[bias_key] = layer.bias
        return tensors

    def save(self, path: PathLike) -> None:
        """Write every layer's weight and bias to a safetensors file."""
        save_named_tensors(self.to_tensors(), path)

    def layer_parameters(self) -> List[Tuple[torch.Tensor, torch.Tensor]]:
        return [(layer.weight, layer.bias) for layer in self.layers]
