"""HTTP API for Cardinal Calculator"""
