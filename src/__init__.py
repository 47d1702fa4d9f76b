"""freqs-eda: frequency tables and frequency charts for pandas DataFrames."""
