"""
Services package.

Contains the dataset reader and writer and the service that runs a complete
scaling job.
"""
