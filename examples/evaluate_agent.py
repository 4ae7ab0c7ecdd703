#!/usr/bin/env python3
"""
Monte-Carlo evaluation of a saved agent.

Usage:
    python examples/evaluate_agent.py --agent tabular --model tabular.safetensors
    python examples/evaluate_agent.py --env ringpong --agent constant --episodes 10
    ENV_ID=mountaincar AGENT_TYPE=mlp MODEL_PATH=mlp.safetensors python examples/evaluate_agent.py

Command line flags override the environment variables read by
EvaluationConfig.from_env().
"""
import argparse
import sys
from pathlib import Path

# make sure repo src is importable (if running from repo root)
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from arcade_rl.config import EvaluationConfig
from arcade_rl.core.errors import ModelLoadError
from arcade_rl.factory import run_evaluation


def main():
    parser = argparse.ArgumentParser(description="Evaluate an agent on an arcade_rl environment")
    parser.add_argument("--env", dest="env_id", choices=["mountaincar", "ringpong"])
    parser.add_argument("--agent", dest="agent_type", choices=["tabular", "mlp", "constant"])
    parser.add_argument("--model", dest="model_path", help="Safetensors file of the agent")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--time-step", dest="time_step", type=float)
    parser.add_argument("--max-steps", dest="max_steps", type=int, help="Step cap per episode (0 = none)")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--device", help="auto, cpu or cuda")
    args = parser.parse_args()

    overrides = {key: value for key, value in vars(args).items() if value is not None}
    config = EvaluationConfig(**{**EvaluationConfig.from_env().model_dump(), **overrides})

    try:
        score = run_evaluation(config)
    except ModelLoadError as exc:
        print(f"Could not load agent: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"{config.agent_type} on {config.env_id}: total reward over {config.episodes} episodes = {score:.1f}")


if __name__ == "__main__":
    main()
