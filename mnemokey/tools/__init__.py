"""
Command line tools for mnemokey.
"""
