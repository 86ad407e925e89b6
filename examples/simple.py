"""A simple example showing the use of a Bloom filter.

Run with::

    python -m examples.simple
"""
import logging

import structlog

from bloomy import BloomFilter


def main() -> None:
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))

    capacity = 128
    bf = BloomFilter(capacity)

    bf.insert("foo")
    bf.insert("bar")

    for word in ("foo", "bar", "baz"):
        print(f"{word}: {word in bf}")
    print(f"approximate count: {bf.count()}")


if __name__ == "__main__":
    main()
