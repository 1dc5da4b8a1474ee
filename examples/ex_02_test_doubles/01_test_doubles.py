"""Test doubles: swap implementations per scope without touching call sites.

An inner scope shadows the binding of the outer scope and keeps its own cache.
Everything it does not bind is still resolved through the outer scope.
"""

from __future__ import annotations

from fnwire import declare, run

Clock = declare("Clock", lambda _: 1_700_000_000)
Timezone = declare("Timezone")


def describe_now() -> str:
    return f"{Clock()} {Timezone()}"


def main() -> None:
    print(f"default_clock={Clock()}")  # => default_clock=1700000000

    def app() -> None:
        print(describe_now())  # => 1700000000 UTC
        frozen = run(describe_now, [Clock.impl(lambda _: 0)])
        print(frozen)  # => 0 UTC

    run(app, [Timezone.impl(lambda _: "UTC")])


if __name__ == "__main__":
    main()
