from __future__ import annotations

from dataclasses import dataclass

from .algorithms import Algorithm


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    time_complexity: str
    space_complexity: str
    stable: bool
    description: str


_INFO = {
    Algorithm.BUBBLE: ("O(n²)", "O(1)", True,
        "Repeatedly steps through the list, compares adjacent elements, and swaps them if "
        "they're in the wrong order. The pass is repeated until the list is sorted. Larger "
        "elements \"bubble up\" to the end."),
    Algorithm.SELECTION: ("O(n²)", "O(1)", False,
        "Divides the list into sorted and unsorted regions. Repeatedly finds the minimum "
        "element from the unsorted region and moves it to the end of the sorted region."),
    Algorithm.INSERTION: ("O(n²)", "O(1)", True,
        "Builds the sorted array one element at a time. Takes each element and inserts it "
        "into its correct position in the already-sorted portion, shifting elements as needed."),
    Algorithm.MERGE: ("O(n log n)", "O(n)", True,
        "Divide and conquer algorithm that divides the array into halves, recursively sorts "
        "them, then merges the sorted halves back together in order."),
    Algorithm.QUICK: ("O(n log n) avg, O(n²) worst", "O(log n)", False,
        "Selects a pivot element and partitions the array so elements smaller than the pivot "
        "come before it and larger elements come after. Recursively applies this to the subarrays."),
    Algorithm.HEAP: ("O(n log n)", "O(1)", False,
        "Builds a max heap from the array, then repeatedly extracts the maximum element and "
        "places it at the end. Uses heapify operations to maintain the heap property."),
    Algorithm.SHELL: ("O(n log n) to O(n²)", "O(1)", False,
        "Generalization of insertion sort that allows exchange of elements that are far apart. "
        "Starts with large gaps between compared elements and progressively reduces the gap."),
    Algorithm.COCKTAIL: ("O(n²)", "O(1)", True,
        "Variation of bubble sort that sorts in both directions alternately. Each pass goes "
        "forward and then backward, which can be more efficient than standard bubble sort."),
    Algorithm.COUNTING: ("O(n + k)", "O(k)", True,
        "Non-comparison algorithm that counts the number of occurrences of each value, then "
        "uses arithmetic to determine positions. Works best when the range of values (k) is "
        "not significantly larger than the number of items (n)."),
    Algorithm.RADIX: ("O(d × n)", "O(n + k)", True,
        "Non-comparison algorithm that processes integers digit by digit, starting from the "
        "least significant digit. Uses counting sort as a subroutine for each digit position."),
    Algorithm.GNOME: ("O(n²)", "O(1)", True,
        "Simple sorting algorithm similar to insertion sort. Like a garden gnome sorting flower "
        "pots, it moves forward if the current element is in order, or swaps and moves backward if not."),
    Algorithm.COMB: ("O(n²) worst, O(n log n) avg", "O(1)", False,
        "Improved bubble sort that eliminates small values near the end (turtles) by using gap "
        "sequences. Starts with large gaps and shrinks by a factor of 1.3 until gap becomes 1."),
    Algorithm.CYCLE: ("O(n²)", "O(1)", False,
        "Minimizes the number of writes to the array by placing each element directly into its "
        "final position. Useful when write operations are expensive, such as with flash memory."),
    Algorithm.TIM: ("O(n log n)", "O(n)", True,
        "Hybrid algorithm combining merge sort and insertion sort. Divides data into runs of 32, "
        "sorts them with insertion sort, then merges runs of doubling size."),
}


def describe(algorithm) -> AlgorithmInfo:
    algorithm = Algorithm.lookup(algorithm)
    time_c, space_c, stable, text = _INFO[algorithm]
    return AlgorithmInfo(algorithm.value, time_c, space_c, stable, text)
