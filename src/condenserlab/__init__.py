"""Virtual lab: measurement of high resistance by leakage of a condenser."""
