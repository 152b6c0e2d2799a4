"""
main.py - awss 콘솔 스크립트 진입점
"""

try:
    from cli.app import cli
except ModuleNotFoundError:
    # console_script로 실행될 때 프로젝트 루트가 sys.path에 없을 수 있음
    import os
    import sys

    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
    from cli.app import cli


def main():
    """Entry point for the awss CLI. Delegates to cli.app:cli."""
    cli(prog_name="awss")


if __name__ == "__main__":
    main()
