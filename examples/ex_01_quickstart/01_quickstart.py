"""Quickstart: declare a service, bind it, and resolve it inside a scope.

Handlers receive one serializable argument. Inside a scope each distinct
argument is computed once and the same value is returned afterwards.
"""

from __future__ import annotations

from fnwire import declare, run


class Greeter:
    def __init__(self, greeting: str) -> None:
        self.greeting = greeting

    def greet(self, name: str) -> str:
        return f"{self.greeting}, {name}!"


GreeterService = declare("GreeterService")
greeter_impl = GreeterService.impl(Greeter)


def main() -> None:
    def body() -> None:
        hello = GreeterService("Hello")
        print(hello.greet("world"))  # => Hello, world!
        print(f"same_instance={GreeterService('Hello') is hello}")  # => same_instance=True

    run(body, [greeter_impl])


if __name__ == "__main__":
    main()
