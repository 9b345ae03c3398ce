import typing
from abc import ABC, abstractmethod
from collections import OrderedDict, namedtuple
from pathlib import Path
from typing import Any, List

from ape import chain, networks
from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance, ContractTransactionHandler
from ape.utils import ZERO_ADDRESS
from ape_accounts import KeyfileAccount
from ethpm_types import MethodABI
from web3 import Web3

from deployment.confirm import _confirm_resolution, _continue
from deployment.networks import is_local_network
from deployment.registry import get_contract, registry_from_ape_deployments
from deployment.utils import (
    _load_yaml,
    check_plugins,
    get_contract_container,
    validate_config,
    verify_contracts,
)

CONTRACT_CONSTRUCTOR_PARAMETER_KEY = "constructor"

w3 = Web3()


class VariableContext:
    def __init__(self, contract_name: str, constants: typing.Dict[str, Any] = None):
        self.contract_name = contract_name
        self.constants = constants or dict()


# Variables


class Variable(ABC):
    VARIABLE_PREFIX = "$"

    @abstractmethod
    def resolve(self) -> Any:
        raise NotImplementedError

    @classmethod
    def is_variable(cls, param: Any) -> bool:
        """Returns True if the param is a variable."""
        return isinstance(param, str) and param.startswith(cls.VARIABLE_PREFIX)


class DeployerAccount(Variable):
    DEPLOYER_INDICATOR = "deployer"

    @classmethod
    def is_deployer(cls, value: str) -> bool:
        """Returns True if the variable is the special deployer variable."""
        return value == cls.DEPLOYER_INDICATOR

    def resolve(self) -> Any:
        deployer_account = Deployer.get_account()
        if deployer_account is None:
            return ZERO_ADDRESS
        return deployer_account.address


class Constant(Variable):
    def __init__(self, constant_name: str, context: VariableContext):
        try:
            self.constant_value = context.constants[constant_name]
        except KeyError:
            raise ValueError(f"Constant '{constant_name}' not found in deployment file.")

    @classmethod
    def is_constant(cls, value: str) -> bool:
        """Returns True if the variable is a deployment constant."""
        return value.isupper()

    def resolve(self) -> Any:
        return self.constant_value


def _resolve_param(value: Any) -> Any:
    """Resolves a single parameter value or a list of parameter values."""
    if isinstance(value, list):
        return [_resolve_param(v) for v in value]

    if isinstance(value, Variable):
        return value.resolve()

    return value


def _resolve_params(parameters: OrderedDict) -> OrderedDict:
    resolved_parameters = OrderedDict()
    for name, value in parameters.items():
        resolved_parameters[name] = _resolve_param(value)
    return resolved_parameters


def _variable_from_value(variable: str, context: VariableContext) -> Variable:
    variable = variable.strip(Variable.VARIABLE_PREFIX)
    if DeployerAccount.is_deployer(variable):
        return DeployerAccount()
    elif Constant.is_constant(variable):
        return Constant(variable, context)
    raise ValueError(
        f"Unknown variable '${variable}' in constructor parameters of {context.contract_name}."
    )


def _process_raw_value(value: Any, variable_context: VariableContext) -> Any:
    if isinstance(value, list):
        return [_process_raw_value(v, variable_context) for v in value]

    if Variable.is_variable(value):
        value = _variable_from_value(value, variable_context)

    return value


def _process_raw_values(values: typing.Dict, variable_context: VariableContext) -> OrderedDict:
    processed_parameters = OrderedDict()
    for name, value in values.items():
        processed_parameters[name] = _process_raw_value(value, variable_context)
    return processed_parameters


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = {}
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


def _validate_constructor_abi_inputs(
    contract_name: str,
    abi_inputs: List[Any],
    resolved_parameters: OrderedDict,
) -> None:
    """Validates the constructor parameters against the constructor ABI."""
    if len(resolved_parameters) != len(abi_inputs):
        raise ConstructorParameters.Invalid(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(resolved_parameters)}."
        )

    codex = enumerate(zip(abi_inputs, resolved_parameters.items()))
    for position, (abi_input, (name, value)) in codex:
        if abi_input.name != name:
            raise ConstructorParameters.Invalid(
                f"{contract_name} constructor parameter '{name}' at position {position} does not "
                f"match the expected ABI name '{abi_input.name}'."
            )
        if not w3.is_encodable(abi_input.type, value):
            raise ConstructorParameters.Invalid(
                f"Constructor param name '{name}' at position {position} has a value '{value}' "
                f"whose type does not match expected ABI type '{abi_input.type}'"
            )


class ConstructorParameters:
    """Represents the constructor parameters for a set of contracts."""

    class Invalid(Exception):
        """Raised when the constructor parameters are invalid"""

    def __init__(self, parameters: OrderedDict):
        self.parameters = parameters
        self.validate()

    @classmethod
    def from_config(cls, config: typing.Dict) -> "ConstructorParameters":
        """Loads the constructor parameters from a params config."""
        print("Processing contract constructor parameters...")
        constants = config.get("constants")
        contracts_config = OrderedDict()
        for contract_info in config["contracts"]:
            if isinstance(contract_info, str):
                contracts_config[contract_info] = OrderedDict()
                continue
            if not isinstance(contract_info, dict) or len(contract_info) != 1:
                raise ValueError("Malformed constructor parameters YAML.")

            contract_name, contract_data = list(contract_info.items())[0]
            contract_data = contract_data or dict()
            context = VariableContext(contract_name=contract_name, constants=constants)
            contracts_config[contract_name] = _process_raw_values(
                contract_data.get(CONTRACT_CONSTRUCTOR_PARAMETER_KEY) or dict(), context
            )

        return cls(parameters=contracts_config)

    def validate(self) -> None:
        """Validates the constructor parameters of every contract against its ABI."""
        for contract_name, parameters in self.parameters.items():
            contract_container = get_contract_container(contract_name)
            _validate_constructor_abi_inputs(
                contract_name=contract_name,
                abi_inputs=contract_container.constructor.abi.inputs,
                resolved_parameters=_resolve_params(parameters=parameters),
            )

    def resolve(self, contract_name: str) -> OrderedDict:
        """Resolves the constructor parameters for a single contract."""
        try:
            parameters = self.parameters[contract_name]
        except KeyError:
            raise ValueError(f"{contract_name} is not listed in the params file.")
        return _resolve_params(parameters)


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        if isinstance(self._account, KeyfileAccount):
            # only keyfile accounts prompt for signatures
            self._account.set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            _continue()

        return method(*args, sender=self._account)


class Deployer(Transactor):
    """
    Represents an ape account plus the deployment parameters and registry
    of a set of contracts, plus validated/annotated execution.
    """

    __DEPLOYER_ACCOUNT: AccountAPI = None

    def __init__(
        self,
        config: typing.Dict,
        path: Path,
        verify: bool,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        super().__init__(account, autosign)

        check_plugins()
        self.path = path
        self.config = config
        self.registry_filepath = validate_config(config=self.config)
        self._set_account(self._account)
        self.constructor_parameters = ConstructorParameters.from_config(self.config)

        # expose constants as attributes (e.g., deployer.constants.FOO)
        constants = config.get("constants") or {}
        _Constants = namedtuple("_Constants", list(constants))
        self.constants = _Constants(**constants)

        self.verify = verify
        self._print_deployment_info()

        if not self._autosign:
            _continue()

    @classmethod
    def from_yaml(cls, filepath: Path, *args, **kwargs) -> "Deployer":
        config = _load_yaml(filepath)
        return cls(config=config, path=filepath, *args, **kwargs)

    @classmethod
    def get_account(cls) -> AccountAPI:
        """Returns the deployer account."""
        return cls.__DEPLOYER_ACCOUNT

    @classmethod
    def _set_account(cls, deployer: AccountAPI) -> None:
        """Sets the deployer account."""
        cls.__DEPLOYER_ACCOUNT = deployer

    def deploy(
        self, container: ContractContainer, log: bool = True, auto_mine: bool = False
    ) -> ContractInstance:
        """
        Deploys a contract from the deployer account with the constructor
        arguments of the params file and records it in the registry.

        `auto_mine` only has an effect on local networks, where it makes the
        provider mine the creation transaction immediately.
        """
        contract_name = container.contract_type.name
        resolved_params = self.constructor_parameters.resolve(contract_name)
        if not self._autosign:
            _confirm_resolution(resolved_params, contract_name)

        previous_auto_mine = None
        if auto_mine and is_local_network():
            previous_auto_mine = chain.provider.auto_mine
            chain.provider.auto_mine = True

        if log:
            print(f"\ndeploying \"{contract_name}\" from {self.get_account().address}")
        try:
            instance = self.get_account().deploy(container, *resolved_params.values())
        finally:
            if previous_auto_mine is not None:
                chain.provider.auto_mine = previous_auto_mine
        if log:
            receipt = instance.receipt
            print(
                f"deployed \"{contract_name}\" at {instance.address} "
                f"(tx: {receipt.txn_hash}, gas: {receipt.gas_used})"
            )

        registry_from_ape_deployments(
            deployments=[instance], output_filepath=self.registry_filepath
        )
        return instance

    def get_contract(self, contract_name: str) -> ContractInstance:
        """Returns the registered instance of a contract on the connected chain."""
        return get_contract(
            filepath=self.registry_filepath,
            chain_id=networks.provider.chain_id,
            contract_name=contract_name,
        )

    def finalize(self, deployments: List[ContractInstance]) -> None:
        """Publishes the deployments to the block explorer, if requested."""
        if self.verify:
            verify_contracts(contracts=deployments)

    def _print_deployment_info(self):
        print(
            f"Account: {self.get_account().address}",
            f"Config: {self.path}",
            f"Registry: {self.registry_filepath}",
            f"Verify: {self.verify}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {networks.provider.network.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
