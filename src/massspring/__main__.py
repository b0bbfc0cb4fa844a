"""
Run with: python -m massspring
"""
import sys

from massspring.main import main

sys.exit(main())
