#!/usr/bin/env python3
"""Minimal startup demo: provision an identity and query it like a host would."""

from __future__ import annotations

import argparse
import logging

from said_identity import Character, IdentityService, LocalRuntime, load_config
from said_identity.actions import get_said_identity_action


def main() -> int:
    parser = argparse.ArgumentParser(description="Provision a SAID identity for a local agent")
    parser.add_argument("--agent-id", default="demo-agent")
    parser.add_argument("--name", default="Demo Agent")
    parser.add_argument("--config", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    runtime = LocalRuntime(
        agent_id=args.agent_id,
        character=Character(name=args.name, bio=["A demo agent with a durable identity."]),
    )
    service = IdentityService(runtime, config=load_config(args.config))
    runtime.register_service(service)
    service.initialize()

    if get_said_identity_action.validate(runtime):
        get_said_identity_action.handler(runtime, None, None, None, lambda msg: print(msg["text"]))
    print()
    print("knowledge:", runtime.character.knowledge[-1])
    service.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
