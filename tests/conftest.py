"""Shared fixtures: sample snippets and an in-memory Redis stand-in."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError


CPP_RECURSIVE_OBST = """\
int sum(vector<int> &freq, int i, int j) {
    int s = 0;
    for (int k = i; k <= j; k++)
        s += freq[k];
    return s;
}

int optCost(vector<int> &freq, int i, int j) {
    if (j < i)
        return 0;
    if (j == i)
        return freq[i];
    int fsum = sum(freq, i, j);
    int min = INT_MAX;
    for (int r = i; r <= j; r++) {
        int cost = optCost(freq, i, r - 1) + optCost(freq, r + 1, j);
        if (cost < min)
            min = cost;
    }
    return min + fsum;
}
"""

CPP_MEMOIZED_OBST = """\
int optCost(vector<int> &freq, int i, int j, vector<vector<int>> &memo) {
    if (j < i)
        return 0;
    if (memo[i][j] != -1)
        return memo[i][j];
    int fsum = sum(freq, i, j);
    int min = INT_MAX;
    for (int r = i; r <= j; r++) {
        int cost = optCost(freq, i, r - 1, memo) + optCost(freq, r + 1, j, memo);
        if (cost < min)
            min = cost;
    }
    return memo[i][j] = min + fsum;
}
"""

CPP_TABULATED_OBST = """\
int optimalSearchTree(vector<int> &keys, vector<int> &freq) {
    int n = keys.size();
    vector<vector<int>> dp(n, vector<int>(n, 0));
    for (int i = 0; i < n; i++)
        dp[i][i] = freq[i];
    for (int l = 2; l <= n; l++) {
        for (int i = 0; i <= n - l; i++) {
            int j = i + l - 1;
            dp[i][j] = INT_MAX;
            int fsum = sum(freq, i, j);
            for (int r = i; r <= j; r++) {
                int c = fsum + ((r > i) ? dp[i][r - 1] : 0) + ((r < j) ? dp[r + 1][j] : 0);
                if (c < dp[i][j])
                    dp[i][j] = c;
            }
        }
    }
    return dp[0][n - 1];
}
"""

JAVA_RECURSIVE_OBST = """\
static int optCost(int[] freq, int i, int j) {
    if (j < i)
        return 0;
    if (j == i)
        return freq[i];
    int fsum = sum(freq, i, j);
    int min = Integer.MAX_VALUE;
    for (int r = i; r <= j; ++r) {
        int cost = optCost(freq, i, r - 1) + optCost(freq, r + 1, j);
        if (cost < min)
            min = cost;
    }
    return min + fsum;
}
"""

CPP_SLIDING_WINDOW_MAX = """\
void find_max(int A[], int N, int K) {
    map<int, int> Count;
    for (int i = 0; i < K - 1; i++)
        Count[A[i]]++;
    set<int> Myset;
    for (auto x : Count)
        if (x.second == 1) Myset.insert(x.first);
    for (int i = K - 1; i < N; i++) {
        Count[A[i]]++;
        if (Count[A[i]] == 1)
            Myset.insert(A[i]);
        else
            Myset.erase(A[i]);
        if (Myset.size() == 0)
            printf("Nothing\\n");
        else
            printf("%d\\n", *Myset.rbegin());
    }
}
"""

PYTHON_BUBBLE_SORT = """\
def bubble_sort(arr):
    for i in range(len(arr)):
        for j in range(len(arr) - i - 1):
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
"""

PYTHON_FOR_ELSE = """\
for item in items:
    if item == target:
        found = True
else:
    found = False
"""

SAMPLE_SNIPPETS = [
    "",
    "eval(x);",
    "x = 1\ny = 2",
    "value = " + "a" * 142,
    PYTHON_BUBBLE_SORT,
    PYTHON_FOR_ELSE,
    CPP_RECURSIVE_OBST,
    CPP_TABULATED_OBST,
    "// only a comment\n# another\n/* and one more */",
    "if (a && b || c) { x = a ? b : c; } else if (d) { print(1); print(2); print(3); }",
    "\n".join("                        nested_%d = %d" % (i, i) for i in range(40)),
]


class FakeRedis:
    """Minimal async Redis stand-in for the archive."""

    def __init__(self, failures: int = 0, error: Exception | None = None):
        self.store: dict[str, str] = {}
        self.expiry: dict[str, int | None] = {}
        self.failures = failures
        self.error = error or RedisConnectionError("connection refused")
        self.set_calls = 0
        self.closed = False

    async def set(self, key, value, ex=None):
        self.set_calls += 1
        if self.failures:
            self.failures -= 1
            raise self.error
        self.store[key] = value
        self.expiry[key] = ex
        return True

    async def get(self, key):
        return self.store.get(key)

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_redis():
    return FakeRedis()
