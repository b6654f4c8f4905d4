from .pager import page_request, page_response, PageRequest
