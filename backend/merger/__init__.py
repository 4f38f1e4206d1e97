"""
Match stream merger for matchstreams.
Correlates the structured schedule feed with the loosely-structured playlist feed
and publishes one snapshot listing every playable stream per scheduled match.
"""
