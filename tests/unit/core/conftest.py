"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_RMD = """\
---
title: Tuning
---

# Hyperparameter Tuning {#tuning}

```{r}
library(mlr3)
```

Some prose.

```{r 03-tuning-007, echo=FALSE}
task = tsk("iris")
```

## Search Spaces

```{r, eval = FALSE, fig.cap = "a, b"}
# not a heading
ps = ps(cp = p_dbl(0, 1))
```

```r
plain fence, never relabeled
```

```{python old-label}
print("x")
```
"""


@pytest.fixture(name="sample_path")
def sample_path_fixture(tmp_path):
    p = tmp_path / "03-tuning.Rmd"
    p.write_text(SAMPLE_RMD)
    return p
