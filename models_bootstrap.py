# models_bootstrap.py
from organization import models as _org_models
from shift import models as _shift_models
from rotation import models as _rotation_models
from assignment import models as _assignment_models
