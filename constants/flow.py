DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
