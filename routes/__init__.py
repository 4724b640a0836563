from .auth import auth_bp
from .records import records_bp
from .views import views_bp
