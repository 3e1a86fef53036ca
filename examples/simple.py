from __future__ import annotations

import sys

import vecplot


# Pipe me to a file.
def main() -> None:
    data = [
        (1850.0, 10.0),
        (1940.0, 12.0),
        (1945.0, 12.2),
        (1989.0, 16.0),
        (2001.0, 20.0),
    ]
    vecplot.plot("simple", "x", "y").line_fill("", data).render(sys.stdout)


if __name__ == "__main__":
    main()
