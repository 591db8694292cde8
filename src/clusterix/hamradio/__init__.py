"""
Amateur radio value types: callsigns and Maidenhead locators.
"""
