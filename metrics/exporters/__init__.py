"""Output encoders for collected samples"""
