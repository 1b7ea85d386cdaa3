from rest_framework import status
from rest_framework.response import Response


def payload(request) -> dict:
    # plain dict so absent form fields are treated as absent, not as empty values
    data = request.data
    return data.dict() if hasattr(data, 'dict') else data


def query(request) -> dict:
    return request.query_params.dict()


def respond(result, created: bool = False) -> Response:
    code = status.HTTP_201_CREATED if created and result.success else result.http_status
    return Response(result.to_dict(), status=code)
