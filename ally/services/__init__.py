"""
Services layer - each service owns one group of collections and talks to the
document store directly. Routes translate HTTP to service calls and back.
"""
