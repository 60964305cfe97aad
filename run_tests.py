#!/usr/bin/env python3
import os
import sys

import pytest


def run_tests():
    """Run all test cases"""
    start_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'tests')
    return pytest.main(['-v', start_dir]) == 0


if __name__ == '__main__':
    success = run_tests()
    sys.exit(0 if success else 1)
