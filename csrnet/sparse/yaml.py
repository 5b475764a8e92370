"""
Support for storing CSR-form matrices to YAML
"""

from pathlib import Path
from typing import List, Optional

import ruamel.yaml

yaml = ruamel.yaml.YAML()


@yaml.register_class
class MatrixYaml(object):
    def __init__(self):
        self.desc: str = ""
        self.rows: int = 0
        self.cols: int = 0
        self.V: List[float] = []
        self.COL_INDEX: List[int] = []
        self.ROW_INDEX: List[int] = [0]

    @classmethod
    def from_mat(cls, m, desc: str = ""):
        from .matrix import Matrix
        if not isinstance(m, Matrix):
            raise TypeError(m)

        self = cls()
        self.desc = desc
        d = m.to_dict()
        self.rows = d['rows']
        self.cols = d['cols']
        self.V = d['V']
        self.COL_INDEX = d['COL_INDEX']
        self.ROW_INDEX = d['ROW_INDEX']
        return self

    def to_dict(self):
        return dict(
            desc=self.desc,
            rows=self.rows,
            cols=self.cols,
            V=self.V,
            COL_INDEX=self.COL_INDEX,
            ROW_INDEX=self.ROW_INDEX,
        )

    @classmethod
    def to_yaml(cls, representer, node):
        return representer.represent_dict(node.to_dict())

    @classmethod
    def from_dict(cls, d: dict):
        self = cls()
        self.desc = str(d.get('desc') or "")
        self.rows = int(d['rows'])
        self.cols = int(d['cols'])
        self.V = list(d['V'])
        self.COL_INDEX = [int(c) for c in d['COL_INDEX']]
        self.ROW_INDEX = [int(r) for r in d['ROW_INDEX']]
        return self

    def to_mat(self):
        from .matrix import Matrix
        return Matrix.from_dict(self.to_dict())

    def dump(self, file):
        p = Path(file)
        yaml.dump(self, p)

    @classmethod
    def load(cls, file):
        p = Path(file)
        y = yaml.load(p)
        return cls.from_dict(dict(y))


def dump_matrix(m, file, desc: Optional[str] = None) -> None:
    """ Write Matrix `m` to YAML file `file` """
    MatrixYaml.from_mat(m, desc=desc or "").dump(file)


def load_matrix(file):
    """ Read a Matrix back from YAML file `file` """
    return MatrixYaml.load(file).to_mat()
