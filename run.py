"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It puts 'src' on 'sys.path' so 'from breathease...' imports resolve from
   a plain checkout.

Usage:
    $ python run.py --duration 10 --seed 1
"""
import os
import sys

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from breathease.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
