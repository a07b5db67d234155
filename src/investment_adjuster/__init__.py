"""Investment Adjuster.

Computes the buys and sells that bring a brokerage account back to its
target allocation while keeping a minimum in the core cash position.
"""

__version__ = "0.1.0"
