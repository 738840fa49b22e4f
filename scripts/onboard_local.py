#!/usr/bin/env python3
"""
Interactive onboarding wizard harness.

Usage:
  python3 scripts/onboard_local.py [API_BASE_URL]

Drives OnboardingController against a running API (defaults to
settings.API_BASE_URL). Start the API locally with:
  uvicorn app.main:app --port 5000

On launch the stored session pointer (if any) is resumed.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.exceptions import OnboardingApiError, OnboardingBusyError
from app.application.use_cases.onboarding_controller import OnboardingController
from app.domain.entities.onboarding_step import parse_step
from app.wiring.dependencies import get_api_client, get_onboarding_controller

HELP = """Commands:
  /start                 start a new onboarding session
  /resume [session_id]   resume a session (defaults to the stored one)
  /info key=value        update restaurant info (e.g. restaurantName=Bella)
  /cuisine a,b,c         set cuisine types
  /category name         add a menu category
  /samples on|off        toggle sample items
  /theme key=value       update theme settings (e.g. theme=dark)
  /next  /prev           move through the wizard
  /goto step             jump to a completed step
  /complete              finish onboarding
  /reset                 forget the session
  /state                 print the current state
  /quit"""


def _print_state(controller: OnboardingController) -> None:
    state = controller.state
    bar = " > ".join(
        f"[{s.label}]" if s.id == state.current_step else s.label for s in controller.steps
    )
    print("-" * 60)
    print(bar)
    print(f"session_id: {state.session_id}")
    print(f"step: {state.current_step.value} ({state.current_step_index + 1}/{len(controller.steps)})")
    print(f"completed: {', '.join(s.value for s in state.completed_steps) or '-'}")
    if state.error:
        print(f"error: {state.error.message} (status={state.error.status})")
    print("-" * 60)


def _parse_pair(arg: str) -> dict[str, str]:
    key, sep, value = arg.partition("=")
    if not sep or not key.strip():
        raise ValueError("expected key=value")
    return {key.strip(): value.strip()}


async def _handle(controller: OnboardingController, cmd: str, arg: str) -> None:
    if cmd == "/start":
        await controller.start_onboarding()
    elif cmd == "/resume":
        session_id = arg or controller.stored_session_id()
        if not session_id:
            print("No stored session to resume.")
            return
        await controller.resume_session(session_id)
    elif cmd == "/info":
        controller.update_restaurant_info(_parse_pair(arg))
    elif cmd == "/cuisine":
        controller.update_restaurant_info({"cuisineType": [c.strip() for c in arg.split(",") if c.strip()]})
    elif cmd == "/category":
        categories = list(controller.state.data.menu_setup.get("categories") or [])
        categories.append({"name": arg, "description": "", "order": len(categories) + 1})
        controller.update_menu_setup({"categories": categories})
    elif cmd == "/samples":
        controller.update_menu_setup({"sampleItems": arg.lower() in ("on", "yes", "true", "1")})
    elif cmd == "/theme":
        controller.update_theme(_parse_pair(arg))
    elif cmd == "/next":
        await controller.next_step()
    elif cmd == "/prev":
        controller.prev_step()
    elif cmd == "/goto":
        step = parse_step(arg)
        if step is None or not controller.state.is_completed(step):
            print(f"Cannot jump to {arg!r}: step not completed yet.")
            return
        controller.go_to_step(step)
    elif cmd == "/complete":
        result = await controller.complete_onboarding()
        print(json.dumps(result, indent=2))
    elif cmd == "/reset":
        controller.reset_onboarding()
    elif cmd == "/state":
        print(json.dumps(
            {
                "restaurantInfo": controller.state.data.restaurant_info,
                "menuSetup": controller.state.data.menu_setup,
                "themeSettings": controller.state.data.theme_settings,
            },
            indent=2,
        ))
    else:
        print(f"Unknown command {cmd}. Type /help.")
        return
    _print_state(controller)


async def main() -> None:
    base_url = sys.argv[1] if len(sys.argv) > 1 else None
    async with get_api_client(base_url) as client:
        controller = get_onboarding_controller(client)
        if await controller.auto_resume() is not None:
            print("Resumed stored onboarding session.")
        print("\nOnboarding Harness")
        print(HELP)
        _print_state(controller)

        while True:
            try:
                line = (await asyncio.to_thread(input, "\n> ")).strip()
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return

            if not line:
                continue
            cmd, _, arg = line.partition(" ")
            cmd = cmd.lower()
            if cmd in ("/quit", "/exit"):
                print("Bye!")
                return
            if cmd == "/help":
                print(HELP)
                continue

            try:
                await _handle(controller, cmd, arg.strip())
            except (OnboardingApiError, OnboardingBusyError, ValueError) as e:
                print(f"ERROR: {e}")


if __name__ == "__main__":
    asyncio.run(main())
