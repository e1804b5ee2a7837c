"""Wiring DispatchGuard into a host framework's before-dispatch hook."""

import logging

from rolegate import DispatchGuard, build_engine, generate_resources
from rolegate.logging.decision_logger import DecisionLogger


class IndexController:
    def index_action(self):
        return "home"


class ShopController:
    def index_action(self):
        return "catalog"

    def buy_action(self):
        return "bought"


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s %(message)s")
    engine = build_engine(
        {
            "roles": {"guest": [], "customer": ["guest"]},
            "resources": generate_resources(IndexController, ShopController),
            "allow": {"guest": {"index": ["*"], "shop": ["index"]}, "customer": {"shop": ["buy"]}},
        },
        logger_sink=DecisionLogger(as_json=True),
    )

    request = {"controller": "Shop", "action": "buy", "role": "guest"}
    guard = DispatchGuard(
        engine,
        resolve_request=lambda: (request["controller"], request["action"]),
        resolve_active_role=lambda: request["role"],
        on_allowed=lambda role, resource, action: True,
        on_denied=lambda role, resource, action: False,
    )
    print("guest may buy:", guard.before_dispatch())
    request["role"] = "customer"
    print("customer may buy:", guard.before_dispatch())


if __name__ == "__main__":
    main()
