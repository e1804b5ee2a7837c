from rolegate import build_engine


def main() -> None:
    engine = build_engine(
        {
            "default": "deny",
            "roles": {"guest": [], "admin": ["guest"]},
            "resources": {"index": ["index", "notFound"], "login": ["index", "submit"], "shop": ["index", "buy"]},
            "allow": {"guest": {"index": ["*"], "login": ["*"]}, "admin": {"*": ["*"]}},
            "deny": {"guest": {"shop": ["*"]}, "admin": {"login": ["*"]}},
        }
    )
    d = engine.evaluate("admin", "Shop", "Buy")
    print(d.allowed, d.reason, d.via_role)  # True matched admin
    print(engine.access_map("guest"))


if __name__ == "__main__":
    main()
