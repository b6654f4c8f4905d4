from typing import Union

import sqlalchemy as sa
import sqlalchemy.orm


# Annotation for SqlAlchemy models
SAModel = type

# Annotation for SqlAlchemy models or aliased classes
SAModelOrAlias = Union[SAModel, sa.orm.util.AliasedClass]

# Annotation for dict rows (result rows returned as dicts)
SARowDict = dict

# Something we can run queries against: an Engine hands out pooled connections, a Connection is used as is
SAConnectable = Union[sa.engine.Engine, sa.engine.Connection]
