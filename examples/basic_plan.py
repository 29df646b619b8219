#!/usr/bin/env python3
"""
Basic fault handling example.

This example demonstrates:
- Declaring an error class hierarchy
- Handling faults with ordered catch clauses and catch_all
- Cleanups that always run
- Attaching data to errors and reading the exit path
- Round-tripping a non-exception payload with repanic

Usage:
    python examples/basic_plan.py
"""

from faultclass.errors import (
    Error,
    alloc_key,
    get_data,
    get_exits,
    new_class,
    panic,
    set_data,
)
from faultclass.handling import repanic, run

FRUIT_ERROR = new_class(None, "fruit")
APPLE_ERROR = FRUIT_ERROR.new_class("apple")
PEAR_ERROR = FRUIT_ERROR.new_class("pear")

BASKET_KEY = alloc_key("basket")


def pick_apple(basket: int) -> None:
    raise APPLE_ERROR.new(
        "bruised apple in basket %d", basket, options=[set_data(BASKET_KEY, basket)]
    )


def typed_handlers() -> None:
    """Subclass handlers go first; the parent catches what is left."""
    print("Typed handlers:")

    def on_apple(err: Error) -> None:
        print(f"  apple handler: {str(err).splitlines()[0]}")
        print(f"  basket: {get_data(err, BASKET_KEY)}")
        print(f"  exit path: {[str(r) for r in get_exits(err)]}")

    run(lambda: pick_apple(3)).catch(APPLE_ERROR, on_apple).catch(
        FRUIT_ERROR, lambda err: print("  fruit handler")
    ).finally_(lambda: print("  basket closed")).execute()
    print()


def plain_failures() -> None:
    """Exceptions outside the hierarchy only reach catch_all."""
    print("Plain failures:")
    run(lambda: int("seven")).catch(
        FRUIT_ERROR, lambda err: print("  never called")
    ).catch_all(lambda exc: print(f"  catch_all: {exc!r}")).execute()
    print()


def unknown_payloads() -> None:
    """Non-exception payloads are adapted, and repanic restores them."""
    print("Unknown payloads:")

    def outer_handler(exc: Exception) -> None:
        print(f"  outer saw: {exc!r}")

    def inner() -> None:
        run(lambda: panic({"code": 7})).catch_all(repanic).execute()

    run(inner).catch_all(outer_handler).execute()
    print()


def main() -> None:
    """Run all examples."""
    typed_handlers()
    plain_failures()
    unknown_payloads()


if __name__ == "__main__":
    main()
