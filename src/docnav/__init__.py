"""Docnav - multi-locale documentation navigation."""
