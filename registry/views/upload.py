from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from ..auth import principal_for
from ..services.uploads import store_logo
from .common import respond


@api_view(['POST'])
@permission_classes([AllowAny])
def upload_logo(request):
    """Store the raw request body as an HMO logo.

    ``POST /api/upload?filename=logo.png`` with the image as the body.  A
    multipart form with a ``file`` part is accepted as well.
    """
    principal = principal_for(request)
    filename = request.query_params.get('filename', '')
    if (request.content_type or '').startswith('multipart/form-data'):
        f = request.FILES.get('file')
        content = f.read() if f else b''
        content_type = getattr(f, 'content_type', '') or ''
        filename = filename or getattr(f, 'name', '')
    else:
        content = request.body
        content_type = (request.content_type or '').split(';')[0].strip()
    result = store_logo(principal, filename, content, content_type,
                        base_url=request.build_absolute_uri('/'))
    return respond(result, created=True)
