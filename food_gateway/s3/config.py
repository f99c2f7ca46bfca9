"""
S3 transfer configuration.
Constants for artifact downloads.
"""

# Multipart Download Settings
MULTIPART_THRESHOLD = 8 * 1024 * 1024   # 8MB; segmented images are normally far smaller
MULTIPART_CHUNKSIZE = 8 * 1024 * 1024   # 8MB per ranged GET
MAX_PART_CONCURRENCY = 1                # One thread per file; files already download in parallel

# Listing
LIST_PAGE_SIZE = 1000                   # list_objects_v2 maximum
