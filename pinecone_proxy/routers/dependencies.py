from fastapi import Request

from pinecone_proxy.services.search_service import SearchService


def get_search_service(request: Request) -> SearchService:
    # create_app() 에서 한 번 생성해 app.state 에 보관
    return request.app.state.search_service
